# vehicle_tracker/api/schemas/user_schema.py
from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from vehicle_tracker.core.enums import Role


def _check_email(value: str | None) -> str | None:
    """Reject malformed addresses but keep the caller's exact string.

    Emails are matched case-sensitively as stored, so the normalized form
    email-validator produces is never persisted.
    """
    if not value or not value.strip():
        return value
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"invalid email address: {e}") from e
    return value


class RegisterRequest(BaseModel):
    # presence and length are checked by AuthService so the messages stay uniform
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=200)
    name: str | None = Field(default=None, max_length=100)
    role: Role | None = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return _check_email(v)


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    password: str | None = Field(default=None, max_length=200)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None = None
    role: Role
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthResponse(BaseModel):
    user: UserResponse
    access_token: str = Field(serialization_alias="accessToken")


class AccessTokenResponse(BaseModel):
    access_token: str = Field(serialization_alias="accessToken")


# -------------------------
# ADMIN
# -------------------------

class CreateUserRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=200)
    name: str | None = Field(default=None, max_length=100)
    role: Role = Role.USER
    is_active: bool = True

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return _check_email(v)


class UpdateUserRequest(BaseModel):
    email: str | None = Field(default=None, min_length=1, max_length=255)
    password: str | None = Field(default=None, min_length=1, max_length=200)
    name: str | None = Field(default=None, max_length=100)
    role: Role | None = None
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return _check_email(v)


class PageMeta(BaseModel):
    total: int
    limit: int
    offset: int
