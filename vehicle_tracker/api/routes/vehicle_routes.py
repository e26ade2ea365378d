# vehicle_tracker/api/routes/vehicle_routes.py

from __future__ import annotations

from flask import Blueprint, request

from vehicle_tracker.api.middlewares.auth_middleware import require_auth, require_roles
from vehicle_tracker.api.responses import parse_pagination, success
from vehicle_tracker.api.schemas.user_schema import PageMeta
from vehicle_tracker.api.schemas.vehicle_schema import (
    CreateVehicleRequest,
    UpdateVehicleRequest,
    VehicleResponse,
)
from vehicle_tracker.core.enums import Role, VehicleStatus
from vehicle_tracker.core.exceptions import ValidationError
from vehicle_tracker.infrastructure.database.session import db_session
from vehicle_tracker.repositories.vehicle_repository import VehicleRepository
from vehicle_tracker.services.vehicle_service import VehicleService

bp_vehicles = Blueprint("vehicles", __name__, url_prefix="/vehicles")


def _build_service(session) -> VehicleService:
    return VehicleService(VehicleRepository(session))


def _dump(vehicle) -> dict:
    return VehicleResponse.model_validate(vehicle).model_dump(mode="json")


# -------------------------
# Read (any authenticated user)
# -------------------------

@bp_vehicles.get("")
@require_auth
def list_vehicles():
    limit, offset = parse_pagination(default_limit=100)
    q = (request.args.get("q") or "").strip() or None

    raw_status = (request.args.get("status") or "").strip().upper()
    try:
        status = VehicleStatus(raw_status) if raw_status else None
    except ValueError as e:
        raise ValidationError("status must be one of ACTIVE, INACTIVE, MAINTENANCE") from e

    with db_session() as session:
        vehicles, total = _build_service(session).list_vehicles(limit=limit, offset=offset, status=status, q=q)

    meta = PageMeta(total=total, limit=limit, offset=offset).model_dump()
    return success("Vehicles fetched successfully", [_dump(v) for v in vehicles], meta=meta)


@bp_vehicles.get("/<int:vehicle_id>")
@require_auth
def get_vehicle(vehicle_id: int):
    with db_session() as session:
        vehicle = _build_service(session).get_vehicle(vehicle_id=vehicle_id)

    return success("Vehicle fetched successfully", _dump(vehicle))


# -------------------------
# Write (ADMIN)
# -------------------------

@bp_vehicles.post("")
@require_auth
@require_roles(Role.ADMIN)
def create_vehicle():
    payload = CreateVehicleRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        vehicle = _build_service(session).create_vehicle(**payload.model_dump())

    return success("Vehicle created successfully", _dump(vehicle), status=201)


@bp_vehicles.put("/<int:vehicle_id>")
@require_auth
@require_roles(Role.ADMIN)
def update_vehicle(vehicle_id: int):
    payload = UpdateVehicleRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        vehicle = _build_service(session).update_vehicle(
            vehicle_id=vehicle_id, **payload.model_dump(exclude_none=True)
        )

    return success("Vehicle updated successfully", _dump(vehicle))


@bp_vehicles.delete("/<int:vehicle_id>")
@require_auth
@require_roles(Role.ADMIN)
def delete_vehicle(vehicle_id: int):
    with db_session() as session:
        _build_service(session).delete_vehicle(vehicle_id=vehicle_id)

    return success("Vehicle deleted successfully")
