# vehicle_tracker/api/middlewares/error_handler.py
from flask import Flask
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from vehicle_tracker.api.responses import failure
from vehicle_tracker.config.flask_config import get_settings
from vehicle_tracker.config.logging_config import get_logger
from vehicle_tracker.core.exceptions import AppError

logger = get_logger(__name__)


def _format_validation_errors(err: PydanticValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "body"
        parts.append(f"{loc}: {item.get('msg')}")
    return "; ".join(parts)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if err.status_code >= 500:
            logger.error("app_error", message=err.message, error=err.error)
        return failure(err.message, err.status_code, error=err.error)

    @app.errorhandler(PydanticValidationError)
    def handle_validation_error(err: PydanticValidationError):
        return failure("Invalid input", 400, error=_format_validation_errors(err))

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        if err.code == 404:
            return failure("Route not found", 404)
        return failure(err.description or err.name, err.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("unhandled_exception", exc_type=err.__class__.__name__)

        detail = str(err) if get_settings().debug else None
        return failure("Internal server error", 500, error=detail)
