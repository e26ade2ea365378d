from __future__ import annotations

from conftest import make_settings
from seed import SEED_USERS, SEED_VEHICLES, seed
from vehicle_tracker.core.enums import Role
from vehicle_tracker.infrastructure.database.session import create_schema, db_session, init_engine
from vehicle_tracker.infrastructure.security.password_hasher import PasswordHasher
from vehicle_tracker.repositories.user_repository import UserRepository


def _fresh_database():
    settings = make_settings()
    init_engine(settings.database_url)
    create_schema()
    return settings


def test_seed_is_idempotent_when_keeping_existing_rows():
    settings = _fresh_database()

    first = seed(settings, keep_existing=True)
    second = seed(settings, keep_existing=True)

    assert first == {"users": len(SEED_USERS), "vehicles": len(SEED_VEHICLES)}
    assert second == {"users": 0, "vehicles": 0}


def test_seeded_admin_can_authenticate():
    seed(_fresh_database())

    with db_session() as session:
        admin = UserRepository(session).get_by_email("rendibuana@gmail.com")
        assert admin is not None
        assert admin.role is Role.ADMIN
        assert PasswordHasher.verify_password("Admin123#", admin.password_hash)
