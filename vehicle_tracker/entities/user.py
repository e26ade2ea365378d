# vehicle_tracker/entities/user.py
from dataclasses import dataclass
from datetime import datetime

from vehicle_tracker.core.enums import Role


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity attached to the request once an access token has been verified."""

    id: int
    email: str
    role: Role


@dataclass(frozen=True)
class TokenClaims:
    sub: int
    email: str
    role: Role
    token_type: str
    jti: str
    issued_at: datetime
    expires_at: datetime

    def to_identity(self) -> AuthenticatedUser:
        return AuthenticatedUser(id=self.sub, email=self.email, role=self.role)
