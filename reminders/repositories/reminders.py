"""Persistence for reminders."""

import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from reminders.core.exceptions import ReminderNotFoundError, ReminderValidationError
from reminders.core.schemas.reminder import Reminder
from reminders.db.models.reminder import Reminder as ReminderModel

logger = logging.getLogger(__name__)


class ReminderRepository:
    """Create, list and fetch reminders.

    Returns plain `Reminder` records, never ORM instances, so callers
    cannot mutate persisted rows by accident.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, title: str, description: str) -> Reminder:
        """Insert a reminder and return it with its assigned id.

        Raises:
            ReminderValidationError: If title or description is blank.
        """
        title = (title or "").strip()
        description = (description or "").strip()
        if not title:
            raise ReminderValidationError("Title is required", field="title")
        if not description:
            raise ReminderValidationError("Description is required", field="description")

        db_reminder = ReminderModel(title=title, description=description)
        try:
            self.db.add(db_reminder)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(db_reminder)

        logger.info("Created reminder", extra={"reminder_id": db_reminder.id})
        return Reminder.model_validate(db_reminder)

    def list(self) -> List[Reminder]:
        rows = self.db.scalars(select(ReminderModel).order_by(ReminderModel.id)).all()
        return [Reminder.model_validate(row) for row in rows]

    def get_by_id(self, reminder_id: int) -> Reminder:
        row = self.db.get(ReminderModel, reminder_id)
        if row is None:
            raise ReminderNotFoundError(reminder_id)
        return Reminder.model_validate(row)

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(ReminderModel)) or 0
