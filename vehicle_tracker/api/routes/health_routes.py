# vehicle_tracker/api/routes/health_routes.py
from flask import Blueprint
from sqlalchemy import text

from vehicle_tracker.api.responses import success
from vehicle_tracker.infrastructure.database.session import db_session, get_engine

bp_health = Blueprint("health", __name__, url_prefix="/health")


@bp_health.get("")
def health():
    return success("Service is healthy", {"status": "ok"})


@bp_health.get("/db")
def health_db():
    with db_session() as session:
        session.execute(text("select 1"))

    return success("Database is reachable", {"db": "ok", "dialect": get_engine().dialect.name})
