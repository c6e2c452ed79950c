"""Database models"""

from reminders.db.models.reminder import Reminder
from reminders.db.models.session_store import SessionRecord
from reminders.db.models.user import User

__all__ = [
    "Reminder",
    "SessionRecord",
    "User",
]
