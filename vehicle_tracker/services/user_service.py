# vehicle_tracker/services/user_service.py

from vehicle_tracker.config.logging_config import get_logger
from vehicle_tracker.config.settings import Settings
from vehicle_tracker.core.enums import Role
from vehicle_tracker.core.exceptions import ConflictError, NotFoundError, ValidationError
from vehicle_tracker.infrastructure.database.models.user_model import UserModel
from vehicle_tracker.infrastructure.security.password_hasher import PasswordHasher
from vehicle_tracker.repositories.user_repository import UserRepository
from vehicle_tracker.services.auth_service import validate_password

logger = get_logger(__name__)


class UserService:
    def __init__(self, user_repository: UserRepository, *, settings: Settings) -> None:
        self._user_repository = user_repository
        self._settings = settings

    def _hash(self, password: str) -> str:
        validate_password(password, min_length=self._settings.password_min_length)
        return PasswordHasher.hash_password(password, iterations=self._settings.password_hash_iterations)

    def get_user(self, *, user_id: int) -> UserModel:
        user = self._user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def list_users(
        self,
        *,
        limit: int = 50,
        offset: int = 0,
        role: Role | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[UserModel], int]:
        users = self._user_repository.list_users(limit=limit, offset=offset, role=role, is_active=is_active)
        total = self._user_repository.count_users(role=role, is_active=is_active)
        return users, total

    def create_user(
        self,
        *,
        email: str,
        password: str,
        name: str | None = None,
        role: Role = Role.USER,
        is_active: bool = True,
    ) -> UserModel:
        email = email.strip()
        if not email:
            raise ValidationError("Email and password are required")
        if self._user_repository.get_by_email(email) is not None:
            raise ConflictError("User with this email already exists")

        user = self._user_repository.add(
            UserModel(
                email=email,
                name=(name or "").strip() or None,
                password_hash=self._hash(password),
                role=role,
                is_active=is_active,
            )
        )
        logger.info("user_created", user_id=user.id, role=user.role.value)
        return user

    def update_user(
        self,
        *,
        user_id: int,
        email: str | None = None,
        name: str | None = None,
        role: Role | None = None,
        is_active: bool | None = None,
        password: str | None = None,
    ) -> UserModel:
        user = self.get_user(user_id=user_id)

        if email is not None and email.strip() != user.email:
            if self._user_repository.get_by_email(email.strip()) is not None:
                raise ConflictError("User with this email already exists")
            user.email = email.strip()
        if name is not None:
            user.name = name.strip() or None
        if role is not None:
            user.role = role
        if is_active is not None:
            user.is_active = is_active
        if password is not None:
            user.password_hash = self._hash(password)

        self._user_repository.add(user)
        logger.info("user_updated", user_id=user.id)
        return user

    def delete_user(self, *, user_id: int) -> None:
        user = self.get_user(user_id=user_id)
        self._user_repository.delete(user)
        logger.info("user_deleted", user_id=user_id)
