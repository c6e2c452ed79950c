"""Web layer utility functions."""

from reminders.web.utils.auth import (
    get_optional_user,
    get_session_token,
    has_valid_session,
    require_user,
)

__all__ = ["get_optional_user", "get_session_token", "has_valid_session", "require_user"]
