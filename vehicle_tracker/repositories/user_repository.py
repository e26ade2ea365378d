# vehicle_tracker/repositories/user_repository.py

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from vehicle_tracker.core.base_repository import BaseRepository
from vehicle_tracker.core.enums import Role
from vehicle_tracker.infrastructure.database.models.user_model import UserModel


class UserRepository(BaseRepository[UserModel]):
    model = UserModel

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_email(self, email: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.email == email)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_users(
        self,
        *,
        limit: int = 50,
        offset: int = 0,
        role: Role | None = None,
        is_active: bool | None = None,
    ) -> list[UserModel]:
        stmt = select(UserModel)
        if role is not None:
            stmt = stmt.where(UserModel.role == role)
        if is_active is not None:
            stmt = stmt.where(UserModel.is_active.is_(is_active))

        stmt = stmt.order_by(UserModel.id.asc()).limit(limit).offset(offset)
        return list(self._session.execute(stmt).scalars().all())

    def count_users(self, *, role: Role | None = None, is_active: bool | None = None) -> int:
        stmt = select(func.count(UserModel.id))
        if role is not None:
            stmt = stmt.where(UserModel.role == role)
        if is_active is not None:
            stmt = stmt.where(UserModel.is_active.is_(is_active))
        return int(self._session.execute(stmt).scalar_one())

    def clear_refresh_token(self, refresh_token: str) -> int:
        stmt = (
            update(UserModel)
            .where(UserModel.refresh_token == refresh_token)
            .values(refresh_token=None)
        )
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)
