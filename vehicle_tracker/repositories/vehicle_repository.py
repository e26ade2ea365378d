# vehicle_tracker/repositories/vehicle_repository.py

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vehicle_tracker.core.base_repository import BaseRepository
from vehicle_tracker.core.enums import VehicleStatus
from vehicle_tracker.infrastructure.database.models.vehicle_model import VehicleModel


class VehicleRepository(BaseRepository[VehicleModel]):
    model = VehicleModel

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def _filtered(self, stmt, *, status: VehicleStatus | None, q: str | None):
        if status is not None:
            stmt = stmt.where(VehicleModel.status == status)
        if q:
            stmt = stmt.where(VehicleModel.name.ilike(f"%{q}%"))
        return stmt

    def list_vehicles(
        self,
        *,
        limit: int = 100,
        offset: int = 0,
        status: VehicleStatus | None = None,
        q: str | None = None,
    ) -> list[VehicleModel]:
        stmt = self._filtered(select(VehicleModel), status=status, q=q)
        stmt = stmt.order_by(VehicleModel.id.asc()).limit(limit).offset(offset)
        return list(self._session.execute(stmt).scalars().all())

    def count_vehicles(self, *, status: VehicleStatus | None = None, q: str | None = None) -> int:
        stmt = self._filtered(select(func.count(VehicleModel.id)), status=status, q=q)
        return int(self._session.execute(stmt).scalar_one())
