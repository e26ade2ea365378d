# vehicle_tracker/infrastructure/database/models/vehicle_model.py

from sqlalchemy import CheckConstraint, Enum, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vehicle_tracker.core.enums import VehicleStatus
from vehicle_tracker.infrastructure.database.base_model import BaseModel, TimestampMixin


class VehicleModel(TimestampMixin, BaseModel):
    __tablename__ = "vehicles"
    __table_args__ = (
        CheckConstraint("fuel_level >= 0 AND fuel_level <= 100", name="ck_vehicles_fuel_level"),
        CheckConstraint("odometer >= 0", name="ck_vehicles_odometer"),
        CheckConstraint("speed >= 0", name="ck_vehicles_speed"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    status: Mapped[VehicleStatus] = mapped_column(
        Enum(VehicleStatus, name="vehicle_status", native_enum=False, length=20),
        nullable=False,
        default=VehicleStatus.ACTIVE,
    )

    fuel_level: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    odometer: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    speed: Mapped[float] = mapped_column(Float, nullable=False, default=0)
