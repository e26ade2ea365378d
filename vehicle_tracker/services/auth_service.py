# vehicle_tracker/services/auth_service.py

from dataclasses import dataclass

from vehicle_tracker.config.logging_config import get_logger
from vehicle_tracker.config.settings import Settings
from vehicle_tracker.core.enums import Role, TokenType
from vehicle_tracker.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    TokenExpiredError,
    UnauthorizedError,
    ValidationError,
)
from vehicle_tracker.entities.user import AuthenticatedUser
from vehicle_tracker.infrastructure.database.models.user_model import UserModel
from vehicle_tracker.infrastructure.security.jwt_provider import JwtProvider
from vehicle_tracker.infrastructure.security.password_hasher import PasswordHasher
from vehicle_tracker.repositories.user_repository import UserRepository

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class AuthResult:
    user: UserModel
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class RefreshResult:
    access_token: str
    refresh_token: str


def _parse_role(role: Role | str | None) -> Role:
    if not role:
        return Role.USER
    try:
        return Role(role)
    except ValueError as e:
        raise ValidationError("Role must be one of USER, ADMIN") from e


def validate_password(password: str | None, *, min_length: int) -> None:
    if not password:
        raise ValidationError("Password is required")
    if len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters")


class AuthService:
    """Registration, login, refresh-token rotation and logout.

    The user row holds at most one refresh token. Every issuance overwrites it,
    which is what invalidates the previous session.
    """

    def __init__(self, *, settings: Settings, user_repo: UserRepository, jwt_provider: JwtProvider) -> None:
        self._settings = settings
        self._users = user_repo
        self._jwt = jwt_provider

    def _issue_session(self, user: UserModel) -> AuthResult:
        access = self._jwt.issue_access_token(user_id=user.id, email=user.email, role=user.role)
        refresh = self._jwt.issue_refresh_token(user_id=user.id, email=user.email, role=user.role)

        # flushed as a single UPDATE of the row
        user.refresh_token = refresh
        self._users.add(user)
        return AuthResult(user=user, access_token=access, refresh_token=refresh)

    def register(
        self,
        *,
        email: str | None,
        password: str | None,
        name: str | None = None,
        role: Role | str | None = None,
    ) -> AuthResult:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")
        validate_password(password, min_length=self._settings.password_min_length)

        if self._users.get_by_email(email) is not None:
            raise ConflictError("User with this email already exists")

        user = self._users.add(
            UserModel(
                email=email,
                name=(name or "").strip() or None,
                password_hash=PasswordHasher.hash_password(
                    password, iterations=self._settings.password_hash_iterations
                ),
                role=_parse_role(role),
                is_active=True,
            )
        )

        result = self._issue_session(user)
        logger.info("user_registered", user_id=user.id, role=user.role.value)
        return result

    def login(self, *, email: str | None, password: str | None) -> AuthResult:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._users.get_by_email(email)
        if user is None or not PasswordHasher.verify_password(password, user.password_hash):
            logger.info("login_failed", reason="bad_credentials")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not user.is_active:
            logger.info("login_failed", reason="inactive", user_id=user.id)
            raise ForbiddenError("Account is deactivated")

        result = self._issue_session(user)
        logger.info("login_succeeded", user_id=user.id)
        return result

    def refresh(self, refresh_token: str | None) -> RefreshResult:
        if not refresh_token:
            raise UnauthorizedError("Refresh token is required")

        try:
            claims = self._jwt.verify(refresh_token, TokenType.REFRESH)
        except TokenExpiredError as e:
            raise UnauthorizedError("Refresh token expired") from e
        except InvalidTokenError as e:
            raise ForbiddenError("Invalid refresh token", error=e.error) from e

        user = self._users.get_by_id(claims.sub)
        if user is None or user.refresh_token != refresh_token:
            # superseded by a later login/refresh, or cleared by logout
            logger.info("refresh_rejected", user_id=claims.sub, reason="not_current")
            raise ForbiddenError("Invalid refresh token")

        if not user.is_active:
            raise ForbiddenError("Account is deactivated")

        rotated = self._issue_session(user)
        logger.info("token_refreshed", user_id=user.id)
        return RefreshResult(access_token=rotated.access_token, refresh_token=rotated.refresh_token)

    def logout(self, refresh_token: str | None) -> None:
        if not refresh_token:
            return

        cleared = self._users.clear_refresh_token(refresh_token)
        logger.info("logout", sessions_cleared=cleared)

    def get_current_user(self, identity: AuthenticatedUser | None) -> UserModel:
        if identity is None:
            raise UnauthorizedError("Not authenticated")

        user = self._users.get_by_id(identity.id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_current_user(
        self,
        identity: AuthenticatedUser | None,
        *,
        name: str | None = None,
        password: str | None = None,
    ) -> UserModel:
        user = self.get_current_user(identity)

        if name is not None:
            user.name = name.strip() or None
        if password is not None:
            validate_password(password, min_length=self._settings.password_min_length)
            user.password_hash = PasswordHasher.hash_password(
                password, iterations=self._settings.password_hash_iterations
            )

        self._users.add(user)
        logger.info("profile_updated", user_id=user.id, password_changed=password is not None)
        return user
