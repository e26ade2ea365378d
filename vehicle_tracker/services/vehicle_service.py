# vehicle_tracker/services/vehicle_service.py

from typing import Any

from vehicle_tracker.config.logging_config import get_logger
from vehicle_tracker.core.enums import VehicleStatus
from vehicle_tracker.core.exceptions import NotFoundError
from vehicle_tracker.infrastructure.database.models.vehicle_model import VehicleModel
from vehicle_tracker.repositories.vehicle_repository import VehicleRepository

logger = get_logger(__name__)

_MUTABLE_FIELDS = ("name", "status", "fuel_level", "odometer", "latitude", "longitude", "speed")


class VehicleService:
    def __init__(self, vehicle_repository: VehicleRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def get_vehicle(self, *, vehicle_id: int) -> VehicleModel:
        vehicle = self._vehicle_repository.get_by_id(vehicle_id)
        if vehicle is None:
            raise NotFoundError("Vehicle not found")
        return vehicle

    def list_vehicles(
        self,
        *,
        limit: int = 100,
        offset: int = 0,
        status: VehicleStatus | None = None,
        q: str | None = None,
    ) -> tuple[list[VehicleModel], int]:
        rows = self._vehicle_repository.list_vehicles(limit=limit, offset=offset, status=status, q=q)
        total = self._vehicle_repository.count_vehicles(status=status, q=q)
        return rows, total

    def create_vehicle(self, **fields: Any) -> VehicleModel:
        data = {k: v for k, v in fields.items() if k in _MUTABLE_FIELDS}
        vehicle = self._vehicle_repository.add(VehicleModel(**data))
        logger.info("vehicle_created", vehicle_id=vehicle.id)
        return vehicle

    def update_vehicle(self, *, vehicle_id: int, **fields: Any) -> VehicleModel:
        vehicle = self.get_vehicle(vehicle_id=vehicle_id)

        for key, value in fields.items():
            if key in _MUTABLE_FIELDS and value is not None:
                setattr(vehicle, key, value)

        self._vehicle_repository.add(vehicle)
        logger.info("vehicle_updated", vehicle_id=vehicle.id, changed_keys=sorted(fields))
        return vehicle

    def delete_vehicle(self, *, vehicle_id: int) -> None:
        vehicle = self.get_vehicle(vehicle_id=vehicle_id)
        self._vehicle_repository.delete(vehicle)
        logger.info("vehicle_deleted", vehicle_id=vehicle_id)
