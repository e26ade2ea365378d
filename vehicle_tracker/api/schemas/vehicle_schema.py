# vehicle_tracker/api/schemas/vehicle_schema.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from vehicle_tracker.core.enums import VehicleStatus


class CreateVehicleRequest(BaseModel):
    name: str = Field(min_length=2, max_length=150)
    status: VehicleStatus = VehicleStatus.ACTIVE
    fuel_level: float = Field(default=0, ge=0, le=100)
    odometer: float = Field(default=0, ge=0)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    speed: float = Field(default=0, ge=0)


class UpdateVehicleRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=150)
    status: VehicleStatus | None = None
    fuel_level: float | None = Field(default=None, ge=0, le=100)
    odometer: float | None = Field(default=None, ge=0)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    speed: float | None = Field(default=None, ge=0)


class VehicleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    status: VehicleStatus
    fuel_level: float
    odometer: float
    latitude: float
    longitude: float
    speed: float
    created_at: datetime | None = None
    updated_at: datetime | None = None
