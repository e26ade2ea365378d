# vehicle_tracker/infrastructure/database/models/__init__.py
# importing the package registers every table on BaseModel.metadata

from vehicle_tracker.infrastructure.database.models.user_model import UserModel
from vehicle_tracker.infrastructure.database.models.vehicle_model import VehicleModel

__all__ = ["UserModel", "VehicleModel"]
