# vehicle_tracker/api/routes/__init__.py

from flask import Flask

from vehicle_tracker.api.routes.auth_routes import bp_auth
from vehicle_tracker.api.routes.health_routes import bp_health
from vehicle_tracker.api.routes.user_routes import bp_users
from vehicle_tracker.api.routes.vehicle_routes import bp_vehicles


def register_routes(app: Flask, *, api_prefix: str = "/api") -> None:
    # health outside /api
    app.register_blueprint(bp_health, url_prefix="/health")

    app.register_blueprint(bp_auth, url_prefix=f"{api_prefix}/auth")
    app.register_blueprint(bp_users, url_prefix=f"{api_prefix}/users")
    app.register_blueprint(bp_vehicles, url_prefix=f"{api_prefix}/vehicles")
