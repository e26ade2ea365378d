# vehicle_tracker/infrastructure/security/jwt_provider.py

from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import uuid4

import jwt

from vehicle_tracker.config.settings import Settings
from vehicle_tracker.core.enums import Role, TokenType
from vehicle_tracker.core.exceptions import ConfigurationError, InvalidTokenError, TokenExpiredError
from vehicle_tracker.entities.user import TokenClaims


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class JwtProvider:
    """Signs and verifies access and refresh tokens.

    Each token type has its own secret, so a refresh token can never pass as an
    access token (and vice versa) even before the ``typ`` claim is checked.
    """

    def __init__(self, settings: Settings, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._settings = settings
        self._issuer = settings.jwt_issuer
        self._algorithm = settings.jwt_algorithm
        self._clock = clock

    def _secret_for(self, token_type: TokenType) -> str:
        if token_type is TokenType.ACCESS:
            secret, env_name = self._settings.access_token_secret, "ACCESS_TOKEN_SECRET"
        else:
            secret, env_name = self._settings.refresh_token_secret, "REFRESH_TOKEN_SECRET"

        if not secret:
            raise ConfigurationError(error=f"{env_name} not configured")
        return secret

    def _lifetime_for(self, token_type: TokenType) -> timedelta:
        if token_type is TokenType.ACCESS:
            return timedelta(minutes=self._settings.access_token_minutes)
        return timedelta(days=self._settings.refresh_token_days)

    def issue_token(self, *, user_id: int, email: str, role: Role | str, token_type: TokenType) -> str:
        secret = self._secret_for(token_type)
        now = self._clock()
        exp = now + self._lifetime_for(token_type)

        claims = {
            "iss": self._issuer,
            "sub": str(user_id),
            "id": int(user_id),
            "email": email,
            "role": Role(role).value,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
            "jti": uuid4().hex,
            "typ": token_type.value,
        }
        return jwt.encode(claims, secret, algorithm=self._algorithm)

    def issue_access_token(self, *, user_id: int, email: str, role: Role | str) -> str:
        return self.issue_token(user_id=user_id, email=email, role=role, token_type=TokenType.ACCESS)

    def issue_refresh_token(self, *, user_id: int, email: str, role: Role | str) -> str:
        return self.issue_token(user_id=user_id, email=email, role=role, token_type=TokenType.REFRESH)

    def verify(self, token: str, token_type: TokenType) -> TokenClaims:
        secret = self._secret_for(token_type)

        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "sub", "jti", "typ"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(error=str(e)) from e

        if claims.get("typ") != token_type.value:
            raise InvalidTokenError(error="unexpected token type")

        try:
            return TokenClaims(
                sub=int(claims["sub"]),
                email=str(claims.get("email", "")),
                role=Role(claims.get("role")),
                token_type=claims["typ"],
                jti=str(claims["jti"]),
                issued_at=datetime.fromtimestamp(int(claims["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc),
            )
        except (TypeError, ValueError) as e:
            raise InvalidTokenError(error="malformed claims") from e
