"""Session gate for protected web routes.

`require_user` runs as a route dependency, so it is evaluated before the
handler body (and before form fields are validated). Without a valid
session it raises `LoginRequired`, which the app turns into a redirect
to the login page.
"""

import logging
from typing import Optional

from fastapi import Depends, Request

from reminders.core.exceptions import LoginRequired
from reminders.core.logging_config import log_security_event
from reminders.core.schemas.auth import CurrentUser
from reminders.core.utils.session_store import SessionStore
from reminders.dependencies import get_auth_service, get_session_store
from reminders.services.auth import AuthService

logger = logging.getLogger(__name__)

# Key under which the session token lives in the signed cookie session
SESSION_TOKEN_KEY = "sid"


def get_session_token(request: Request) -> Optional[str]:
    token = request.session.get(SESSION_TOKEN_KEY)
    return token if isinstance(token, str) else None


def has_valid_session(request: Request, store: SessionStore) -> bool:
    """True when the request carries a token for a live server-side session.

    Pure: no writes to the cookie session or the store.
    """
    return store.get_user_id(get_session_token(request)) is not None


def get_optional_user(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> Optional[CurrentUser]:
    """Current user for pages that render differently when logged in."""
    return auth.resolve(get_session_token(request))


def require_user(
    request: Request,
    store: SessionStore = Depends(get_session_store),
    auth: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    """Dependency guarding protected routes.

    The gate decision is `has_valid_session`; the user is resolved only
    after it passes. `store` is the same per-request instance the auth
    service holds.

    Raises:
        LoginRequired: If the request has no valid session.
    """
    user = None
    if has_valid_session(request, store):
        user = auth.resolve(get_session_token(request))
    if user is None:
        log_security_event(
            "login_required",
            f"Unauthenticated {request.method} to protected path {request.url.path}",
            ip_address=request.client.host if request.client else None,
        )
        raise LoginRequired(request.url.path)
    return user
