#!/usr/bin/env python3
"""Seed the database with demo users and vehicles.

Usage:
    # Uses DATABASE_URL (or the DB_* variables) from the environment / .env:
    python scripts/seed.py

    # Keep existing rows and only add what is missing:
    python scripts/seed.py --keep-existing
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from sqlalchemy import delete, select  # noqa: E402

from vehicle_tracker.config.logging_config import configure_logging  # noqa: E402
from vehicle_tracker.config.settings import Settings  # noqa: E402
from vehicle_tracker.core.enums import Role, VehicleStatus  # noqa: E402
from vehicle_tracker.infrastructure.database.models import UserModel, VehicleModel  # noqa: E402
from vehicle_tracker.infrastructure.database.session import create_schema, db_session, init_engine  # noqa: E402
from vehicle_tracker.infrastructure.security.password_hasher import PasswordHasher  # noqa: E402
from vehicle_tracker.repositories.user_repository import UserRepository  # noqa: E402

SEED_USERS = [
    ("Rendi Buana", "rendibuana@gmail.com", "Admin123#", Role.ADMIN),
    ("Admin Widya", "admin@widya.com", "Admin456!", Role.ADMIN),
    ("Budi Santoso", "budi.santoso@gmail.com", "User123!", Role.USER),
    ("Siti Nurhaliza", "siti.nurhaliza@gmail.com", "User456!", Role.USER),
    ("Ahmad Rizky", "ahmad.rizky@gmail.com", "User789!", Role.USER),
]

# name, status, fuel_level, odometer, latitude, longitude, speed
SEED_VEHICLES = [
    ("Toyota Avanza - B1234XYZ", VehicleStatus.ACTIVE, 75.5, 45230.8, -6.200000, 106.816666, 0),
    ("Honda Jazz - B5678ABC", VehicleStatus.ACTIVE, 60.2, 32150.5, -6.175110, 106.865036, 45.5),
    ("Suzuki Ertiga - B9012DEF", VehicleStatus.ACTIVE, 85.0, 28900.0, -6.914744, 107.609810, 60.0),
    ("Daihatsu Xenia - B3456GHI", VehicleStatus.INACTIVE, 20.5, 67890.3, -7.797068, 110.370529, 0),
    ("Mitsubishi Pajero - B7890JKL", VehicleStatus.ACTIVE, 95.0, 15230.2, -8.670458, 115.212631, 70.3),
    ("Isuzu Panther - B2345MNO", VehicleStatus.MAINTENANCE, 45.8, 125600.7, -6.121435, 106.774124, 0),
    ("Toyota Fortuner - B6789PQR", VehicleStatus.ACTIVE, 70.0, 52100.5, -6.302100, 106.652800, 55.0),
    ("Honda CR-V - B0123STU", VehicleStatus.ACTIVE, 80.5, 38750.0, -6.229728, 106.689857, 40.2),
    ("Nissan X-Trail - B4567VWX", VehicleStatus.ACTIVE, 55.3, 44320.8, -3.316694, 114.590111, 65.8),
    ("Mazda CX-5 - B8901YZA", VehicleStatus.INACTIVE, 30.0, 71450.2, -5.147665, 119.432732, 0),
    ("Hyundai Creta - B1357BCD", VehicleStatus.ACTIVE, 92.0, 18900.5, -0.502106, 117.153709, 50.5),
    ("KIA Seltos - B2468EFG", VehicleStatus.ACTIVE, 65.5, 35670.3, -6.990389, 110.423447, 58.7),
]


def seed(settings: Settings, *, keep_existing: bool = False) -> dict:
    """Insert the demo rows into an initialised database. Returns the counts created."""
    created_users = 0
    created_vehicles = 0

    with db_session() as session:
        if not keep_existing:
            session.execute(delete(VehicleModel))
            session.execute(delete(UserModel))

        users = UserRepository(session)
        for name, email, password, role in SEED_USERS:
            if users.get_by_email(email) is not None:
                continue
            users.add(
                UserModel(
                    name=name,
                    email=email,
                    password_hash=PasswordHasher.hash_password(
                        password, iterations=settings.password_hash_iterations
                    ),
                    role=role,
                    is_active=True,
                )
            )
            created_users += 1

        existing_names = set(session.scalars(select(VehicleModel.name)))
        for name, status, fuel, odometer, lat, lng, speed in SEED_VEHICLES:
            if name in existing_names:
                continue
            session.add(
                VehicleModel(
                    name=name,
                    status=status,
                    fuel_level=fuel,
                    odometer=odometer,
                    latitude=lat,
                    longitude=lng,
                    speed=speed,
                )
            )
            created_vehicles += 1

    return {"users": created_users, "vehicles": created_vehicles}


def main():
    parser = argparse.ArgumentParser(
        description="Seed the Vehicle Tracker database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Do not clear the users and vehicles tables first",
    )
    args = parser.parse_args()

    settings = Settings()
    configure_logging(log_level=settings.log_level, json_output=settings.log_json)

    try:
        init_engine(settings.database_url, echo=settings.db_echo)
        create_schema()
        result = seed(settings, keep_existing=args.keep_existing)
    except Exception as e:
        print(f"Error during seeding: {e}")
        sys.exit(1)

    print("Seeding completed.")
    print(f"  Users created: {result['users']}")
    print(f"  Vehicles created: {result['vehicles']}")
    print("")
    print("Admin login:")
    print(f"  Email: {SEED_USERS[0][1]}")
    print(f"  Password: {SEED_USERS[0][2]}")


if __name__ == "__main__":
    main()
