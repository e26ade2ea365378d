# vehicle_tracker/api/routes/user_routes.py

from __future__ import annotations

from flask import Blueprint, request

from vehicle_tracker.api.middlewares.auth_middleware import require_auth, require_roles
from vehicle_tracker.api.responses import parse_bool_arg, parse_pagination, success
from vehicle_tracker.api.schemas.user_schema import (
    CreateUserRequest,
    PageMeta,
    UpdateUserRequest,
    UserResponse,
)
from vehicle_tracker.config.flask_config import get_settings
from vehicle_tracker.core.enums import Role
from vehicle_tracker.core.exceptions import ValidationError
from vehicle_tracker.infrastructure.database.session import db_session
from vehicle_tracker.repositories.user_repository import UserRepository
from vehicle_tracker.services.user_service import UserService

bp_users = Blueprint("users", __name__, url_prefix="/users")


# -------------------------
# Helpers
# -------------------------

def _build_service(session) -> UserService:
    return UserService(UserRepository(session), settings=get_settings())


def _dump(user) -> dict:
    return UserResponse.model_validate(user).model_dump(mode="json")


def _role_filter() -> Role | None:
    raw = (request.args.get("role") or "").strip().upper()
    if not raw:
        return None
    try:
        return Role(raw)
    except ValueError as e:
        raise ValidationError("role must be one of USER, ADMIN") from e


# -------------------------
# ADMIN
# -------------------------

@bp_users.get("")
@require_auth
@require_roles(Role.ADMIN)
def list_users():
    limit, offset = parse_pagination()
    role = _role_filter()
    is_active = parse_bool_arg("is_active")

    with db_session() as session:
        users, total = _build_service(session).list_users(
            limit=limit, offset=offset, role=role, is_active=is_active
        )

    meta = PageMeta(total=total, limit=limit, offset=offset).model_dump()
    return success("Users fetched successfully", [_dump(u) for u in users], meta=meta)


@bp_users.get("/<int:user_id>")
@require_auth
@require_roles(Role.ADMIN)
def get_user(user_id: int):
    with db_session() as session:
        user = _build_service(session).get_user(user_id=user_id)

    return success("User fetched successfully", _dump(user))


@bp_users.post("")
@require_auth
@require_roles(Role.ADMIN)
def create_user():
    payload = CreateUserRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        user = _build_service(session).create_user(**payload.model_dump())

    return success("User created successfully", _dump(user), status=201)


@bp_users.put("/<int:user_id>")
@require_auth
@require_roles(Role.ADMIN)
def update_user(user_id: int):
    payload = UpdateUserRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        user = _build_service(session).update_user(user_id=user_id, **payload.model_dump(exclude_none=True))

    return success("User updated successfully", _dump(user))


@bp_users.delete("/<int:user_id>")
@require_auth
@require_roles(Role.ADMIN)
def delete_user(user_id: int):
    with db_session() as session:
        _build_service(session).delete_user(user_id=user_id)

    return success("User deleted successfully")
