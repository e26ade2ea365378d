# vehicle_tracker/main.py
from __future__ import annotations

import os

from flask import Flask
from flask_cors import CORS

from vehicle_tracker.api.middlewares.error_handler import register_error_handlers
from vehicle_tracker.api.responses import success
from vehicle_tracker.api.routes import register_routes
from vehicle_tracker.config.flask_config import configure_app
from vehicle_tracker.config.logging_config import configure_logging, get_logger
from vehicle_tracker.config.settings import Settings
from vehicle_tracker.infrastructure.database.session import create_schema, init_engine
from vehicle_tracker.infrastructure.security.jwt_provider import JwtProvider

API_PREFIX = "/api"
API_VERSION = "1.0.0"


def create_app(settings: Settings | None = None, *, jwt_provider: JwtProvider | None = None) -> Flask:
    settings = settings or Settings()

    configure_logging(log_level=settings.log_level, json_output=settings.log_json)
    logger = get_logger(__name__)

    app = Flask(__name__)

    # the refresh token travels as a cookie, so the dashboard origin needs credentials
    CORS(
        app,
        resources={rf"{API_PREFIX}/*": {"origins": [settings.client_url]}},
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )

    configure_app(app, settings)
    app.extensions["jwt_provider"] = jwt_provider or JwtProvider(settings)

    init_engine(settings.database_url, echo=settings.db_echo)
    create_schema()

    register_routes(app, api_prefix=API_PREFIX)
    register_error_handlers(app)

    @app.get("/")
    def index():
        return success("Vehicle Tracker API is running", {"version": API_VERSION})

    logger.info("app_created", environment=settings.environment)
    return app


if __name__ == "__main__":
    application = create_app()
    application.run(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        debug=application.config["DEBUG"],
    )
