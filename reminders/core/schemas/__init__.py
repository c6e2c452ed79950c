"""Pydantic schemas shared by the API and web layers."""

from reminders.core.schemas.auth import CurrentUser, UserRecord
from reminders.core.schemas.reminder import Reminder, ReminderCreate

__all__ = ["CurrentUser", "Reminder", "ReminderCreate", "UserRecord"]
