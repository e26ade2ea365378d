from __future__ import annotations

import pytest

from vehicle_tracker.config.settings import Settings
from vehicle_tracker.core.enums import Role
from vehicle_tracker.infrastructure.database.models import UserModel
from vehicle_tracker.infrastructure.database.session import db_session
from vehicle_tracker.infrastructure.security.password_hasher import PasswordHasher
from vehicle_tracker.main import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "AdminPass123"
USER_PASSWORD = "UserPass123"


def make_settings(**overrides) -> Settings:
    values = dict(
        db_url="sqlite:///:memory:",
        environment="development",
        debug=False,
        access_token_secret="test-access-secret",
        refresh_token_secret="test-refresh-secret",
        # keeps PBKDF2 fast under test
        password_hash_iterations=1000,
        client_url="http://localhost:3000",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def app(settings):
    # init_engine() disposes the previous engine, so every app gets an empty
    # in-memory database
    application = create_app(settings)
    application.config["TESTING"] = True
    return application


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_user(app, settings):
    with db_session() as session:
        user = UserModel(
            email=ADMIN_EMAIL,
            name="Admin",
            password_hash=PasswordHasher.hash_password(ADMIN_PASSWORD, iterations=settings.password_hash_iterations),
            role=Role.ADMIN,
            is_active=True,
        )
        session.add(user)
        session.flush()
        return {"id": user.id, "email": user.email, "password": ADMIN_PASSWORD}


def register(client, email: str, password: str = USER_PASSWORD, **extra):
    return client.post("/api/auth/register", json={"email": email, "password": password, **extra})


def login(client, email: str, password: str):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_token(app, admin_user):
    # separate client so the admin refresh cookie does not leak into `client`
    res = login(app.test_client(), admin_user["email"], admin_user["password"])
    assert res.status_code == 200
    return res.get_json()["data"]["accessToken"]


@pytest.fixture()
def user_token(app):
    res = register(app.test_client(), "member@example.com")
    assert res.status_code == 201
    return res.get_json()["data"]["accessToken"]
