#!/usr/bin/env python3
"""
Database setup script for Reminders.

Creates the tables and, in DEV_MODE, the demo user.
"""

import sys

from reminders.core.config import settings
from reminders.core.exceptions import SeedingDisabledError
from reminders.core.utils.database_helpers import check_database_health, get_database_info
from reminders.db.init_db import init_database
from reminders.db.seeds.demo_user import seed_demo_user
from reminders.db.session import get_db_sync


def main() -> bool:
    """Initialize database based on configuration"""
    print("Reminders Database Setup")
    print("=" * 40)

    db_info = get_database_info()
    print(f"Database Type: {db_info['type']}")
    print(f"Connected: {db_info['connected']}")

    if db_info['error']:
        print(f"Connection Error: {db_info['error']}")
        return False

    if db_info['version']:
        print(f"Database Version: {db_info['version']}")

    print(f"Existing Tables: {len(db_info['tables'])}")
    for table in sorted(db_info['tables']):
        print(f"  - {table}")

    print("\nInitializing database...")
    try:
        init_database()
    except Exception as e:
        print(f"Database initialization failed: {e}")
        return False
    print("Database initialized successfully!")

    if settings.SEED_DEMO_USER:
        with get_db_sync() as db:
            try:
                user = seed_demo_user(db)
                print(f"Demo user available: {user.username}")
            except SeedingDisabledError as e:
                print(f"Skipped demo user: {e}")

    health = check_database_health()
    print(f"Health Status: {health['status']}")
    print(f"Table Count: {health['table_count']}")
    return health['status'] == 'healthy'


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
