# vehicle_tracker/client/__init__.py
from vehicle_tracker.client.api_client import ApiError, VehicleTrackerClient
from vehicle_tracker.client.auth_sync import AuthSync
from vehicle_tracker.client.session_store import ClientSessionStore

__all__ = ["ApiError", "AuthSync", "ClientSessionStore", "VehicleTrackerClient"]
