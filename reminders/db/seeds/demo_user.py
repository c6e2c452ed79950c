#!/usr/bin/env python3
"""
Seed the demo login account.

The demo credentials are public, so seeding refuses to run unless
DEV_MODE is enabled.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from reminders.core.config import Settings, settings as default_settings
from reminders.core.exceptions import SeedingDisabledError
from reminders.core.schemas.auth import UserRecord
from reminders.core.security import PasswordHasher
from reminders.repositories.users import UserRepository

logger = logging.getLogger("reminders.seeds")


def seed_demo_user(
    db: Session,
    settings: Optional[Settings] = None,
    hasher: Optional[PasswordHasher] = None,
) -> UserRecord:
    """
    Create the demo user if it doesn't exist.

    Raises:
        SeedingDisabledError: If DEV_MODE is off.
    """
    settings = settings or default_settings
    if not settings.DEV_MODE:
        raise SeedingDisabledError(
            "Refusing to seed the demo user: DEV_MODE is disabled"
        )

    users = UserRepository(db)
    existing_user = users.find_by_username(settings.DEMO_USERNAME)
    if existing_user:
        logger.info("Demo user already exists", extra={"user_id": existing_user.id})
        return existing_user

    hasher = hasher or PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    user = users.create(settings.DEMO_USERNAME, hasher.hash(settings.DEMO_PASSWORD))

    logger.warning(
        "Seeded demo user with well-known credentials; do not use in production",
        extra={"user_id": user.id, "username": user.username},
    )
    return user


if __name__ == "__main__":
    from reminders.db.init_db import init_database
    from reminders.db.session import get_db_sync

    logging.basicConfig(level=logging.INFO)
    init_database()
    with get_db_sync() as db:
        seed_demo_user(db)
