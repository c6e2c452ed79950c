"""Domain exceptions raised by repositories and services.

Route handlers translate these into HTTP responses; nothing here knows
about HTTP status codes.
"""

from typing import Optional


class ReminderAppError(Exception):
    """Base class for application errors."""


class ReminderNotFoundError(ReminderAppError):
    """Raised when a reminder id does not resolve to a record."""

    def __init__(self, reminder_id: int):
        super().__init__(f"Reminder {reminder_id} not found")
        self.reminder_id = reminder_id


class ReminderValidationError(ReminderAppError):
    """Raised when reminder input violates a domain invariant."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DuplicateUsernameError(ReminderAppError):
    """Raised when creating a user whose username is already taken."""


class SeedingDisabledError(ReminderAppError):
    """Raised when demo seeding is attempted outside of dev mode."""


class LoginRequired(ReminderAppError):
    """Raised by the web gate when a protected route has no valid session."""

    def __init__(self, path: str = ""):
        super().__init__(f"Login required for {path or 'this page'}")
        self.path = path
