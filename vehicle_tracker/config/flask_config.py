# vehicle_tracker/config/flask_config.py
from flask import Flask

from vehicle_tracker.config.settings import Settings


def configure_app(app: Flask, settings: Settings) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    app.config["JSON_SORT_KEYS"] = False
    # single settings instance for the whole process, read by routes through get_settings()
    app.extensions["settings"] = settings


def get_settings() -> Settings:
    from flask import current_app

    return current_app.extensions["settings"]
