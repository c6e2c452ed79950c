"""Persistence for login accounts."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from reminders.core.exceptions import DuplicateUsernameError
from reminders.core.schemas.auth import UserRecord
from reminders.db.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        if not username:
            return None
        row = self.db.scalar(select(User).where(User.username == username))
        if row is None:
            return None
        return UserRecord.model_validate(row)

    def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        row = self.db.get(User, user_id)
        if row is None:
            return None
        return UserRecord.model_validate(row)

    def create(self, username: str, password_hash: str) -> UserRecord:
        """Insert a user. `password_hash` must already be hashed.

        Raises:
            DuplicateUsernameError: If the username is taken.
        """
        user = User(username=username, password=password_hash)
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateUsernameError(f"Username '{username}' already exists") from None
        self.db.refresh(user)
        logger.info("Created user", extra={"user_id": user.id})
        return UserRecord.model_validate(user)

    def update_password(self, user_id: int, password_hash: str) -> None:
        user = self.db.get(User, user_id)
        if user is None:
            return
        user.password = password_hash
        self.db.commit()
