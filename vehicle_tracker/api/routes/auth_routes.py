# vehicle_tracker/api/routes/auth_routes.py

from flask import Blueprint, request

from vehicle_tracker.api.middlewares.auth_middleware import current_identity, get_jwt_provider, require_auth
from vehicle_tracker.api.responses import clear_refresh_cookie, set_refresh_cookie, success
from vehicle_tracker.api.schemas.user_schema import (
    AccessTokenResponse,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from vehicle_tracker.config.flask_config import get_settings
from vehicle_tracker.infrastructure.database.session import db_session
from vehicle_tracker.repositories.user_repository import UserRepository
from vehicle_tracker.services.auth_service import AuthResult, AuthService

bp_auth = Blueprint("auth", __name__, url_prefix="/auth")


def _build_service(session) -> AuthService:
    return AuthService(
        settings=get_settings(),
        user_repo=UserRepository(session),
        jwt_provider=get_jwt_provider(),
    )


def _auth_payload(result: AuthResult) -> dict:
    return AuthResponse(
        user=UserResponse.model_validate(result.user),
        access_token=result.access_token,
    ).model_dump(mode="json", by_alias=True)


def _refresh_cookie_value() -> str | None:
    return request.cookies.get(get_settings().refresh_cookie_name)


@bp_auth.post("/register")
def register():
    payload = RegisterRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        result = _build_service(session).register(**payload.model_dump())

    response, status = success("User registered successfully", _auth_payload(result), status=201)
    set_refresh_cookie(response, result.refresh_token, get_settings())
    return response, status


@bp_auth.post("/login")
def login():
    payload = LoginRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        result = _build_service(session).login(email=payload.email, password=payload.password)

    response, status = success("Login successful", _auth_payload(result))
    set_refresh_cookie(response, result.refresh_token, get_settings())
    return response, status


@bp_auth.post("/refresh")
def refresh():
    with db_session() as session:
        result = _build_service(session).refresh(_refresh_cookie_value())

    data = AccessTokenResponse(access_token=result.access_token).model_dump(by_alias=True)
    response, status = success("Access token refreshed", data)
    # rotated: the previous cookie value is no longer accepted
    set_refresh_cookie(response, result.refresh_token, get_settings())
    return response, status


@bp_auth.post("/logout")
def logout():
    token = _refresh_cookie_value()

    with db_session() as session:
        _build_service(session).logout(token)

    response, status = success("Logout successful")
    if token:
        clear_refresh_cookie(response, get_settings())
    return response, status


@bp_auth.get("/me")
@require_auth
def me():
    with db_session() as session:
        user = _build_service(session).get_current_user(current_identity())

    return success("User fetched successfully", UserResponse.model_validate(user).model_dump(mode="json"))


@bp_auth.patch("/me")
@require_auth
def update_me():
    payload = UpdateProfileRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        user = _build_service(session).update_current_user(
            current_identity(),
            name=payload.name,
            password=payload.password,
        )

    return success("Profile updated successfully", UserResponse.model_validate(user).model_dump(mode="json"))
