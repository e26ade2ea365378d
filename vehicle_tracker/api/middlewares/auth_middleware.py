# vehicle_tracker/api/middlewares/auth_middleware.py
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import current_app, g, request

from vehicle_tracker.core.enums import Role, TokenType
from vehicle_tracker.core.exceptions import (
    ForbiddenError,
    InvalidTokenError,
    TokenExpiredError,
    UnauthorizedError,
)
from vehicle_tracker.entities.user import AuthenticatedUser
from vehicle_tracker.infrastructure.security.jwt_provider import JwtProvider

F = TypeVar("F", bound=Callable[..., Any])


def get_jwt_provider() -> JwtProvider:
    return current_app.extensions["jwt_provider"]


def current_identity() -> AuthenticatedUser | None:
    return getattr(g, "auth", None)


def _get_bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    parts = auth.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    raise UnauthorizedError("Access token is required")


def require_auth(fn: F) -> F:
    # every access-token problem is a 401: it is the credential the client refreshes
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = _get_bearer_token()

        try:
            claims = get_jwt_provider().verify(token, TokenType.ACCESS)
        except TokenExpiredError as e:
            raise UnauthorizedError("Access token expired") from e
        except InvalidTokenError as e:
            raise UnauthorizedError("Invalid access token", error=e.error) from e

        g.auth = claims.to_identity()
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*allowed_roles: Role | str):
    allowed = frozenset(Role(r) for r in allowed_roles)

    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            identity = current_identity()
            if identity is None:
                raise UnauthorizedError("Not authenticated")

            if identity.role not in allowed:
                raise ForbiddenError("Access denied: insufficient role")

            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
