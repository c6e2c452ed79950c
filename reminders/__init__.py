"""Reminders: a small CRUD web application with session-based login."""

__version__ = "1.0.0"
