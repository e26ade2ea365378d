# vehicle_tracker/api/responses.py
from __future__ import annotations

from typing import Any

from flask import Response, jsonify, request

from vehicle_tracker.config.settings import Settings
from vehicle_tracker.core.exceptions import ValidationError


def success(message: str, data: Any = None, *, status: int = 200, meta: dict | None = None) -> tuple[Response, int]:
    payload: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        payload["data"] = data
    if meta is not None:
        payload["meta"] = meta
    return jsonify(payload), status


def failure(message: str, status: int, *, error: str | None = None) -> tuple[Response, int]:
    payload: dict[str, Any] = {"success": False, "message": message}
    if error:
        payload["error"] = error
    return jsonify(payload), status


def set_refresh_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        settings.refresh_cookie_name,
        token,
        max_age=settings.refresh_cookie_max_age,
        httponly=True,
        secure=not settings.is_development,
        samesite="Strict",
        path="/",
    )


def clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        settings.refresh_cookie_name,
        httponly=True,
        secure=not settings.is_development,
        samesite="Strict",
        path="/",
    )


def parse_pagination(*, default_limit: int = 50, max_limit: int = 500) -> tuple[int, int]:
    try:
        limit = int(request.args.get("limit", default_limit))
        offset = int(request.args.get("offset", 0))
    except ValueError as e:
        raise ValidationError("limit and offset must be integers") from e

    return max(1, min(limit, max_limit)), max(offset, 0)


def parse_bool_arg(name: str) -> bool | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    if raw.lower() in ("1", "true", "yes"):
        return True
    if raw.lower() in ("0", "false", "no"):
        return False
    raise ValidationError(f"{name} must be a boolean")
