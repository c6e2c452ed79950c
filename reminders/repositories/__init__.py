"""Repositories returning plain records over the SQLAlchemy models."""

from reminders.repositories.reminders import ReminderRepository
from reminders.repositories.users import UserRepository

__all__ = ["ReminderRepository", "UserRepository"]
