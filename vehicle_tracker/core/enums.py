# vehicle_tracker/core/enums.py
from enum import Enum


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class VehicleStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    MAINTENANCE = "MAINTENANCE"


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"
