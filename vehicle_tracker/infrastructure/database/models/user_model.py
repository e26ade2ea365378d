# vehicle_tracker/infrastructure/database/models/user_model.py

from sqlalchemy import Boolean, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vehicle_tracker.core.enums import Role
from vehicle_tracker.infrastructure.database.base_model import BaseModel, TimestampMixin


class UserModel(TimestampMixin, BaseModel):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role", native_enum=False, length=10),
        nullable=False,
        default=Role.USER,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # single active session per user: the last refresh token handed out
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
