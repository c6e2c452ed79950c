"""Login and logout web routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from reminders.core.config import settings
from reminders.core.limiter import limiter
from reminders.core.logging_config import log_authentication_attempt, log_security_event
from reminders.core.templates import templates
from reminders.core.utils.session_store import SessionStore
from reminders.dependencies import get_auth_service, get_session_store
from reminders.services.auth import AuthService
from reminders.web.utils.auth import SESSION_TOKEN_KEY, get_session_token, has_valid_session
from reminders.web.utils.csrf import verify_csrf_token

logger = logging.getLogger(__name__)

router = APIRouter()

LOGIN_FAILED_MESSAGE = "Invalid username or password"


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, store: SessionStore = Depends(get_session_store)):
    """Login form. Already authenticated clients go straight home."""
    if has_valid_session(request, store):
        return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    return templates.TemplateResponse(request, "login.html", {"error": None, "username": ""})


@router.post("/login", dependencies=[Depends(verify_csrf_token)])
@limiter.limit(settings.rate_limit_login)
def login(
    request: Request,
    username: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    auth: AuthService = Depends(get_auth_service),
):
    """Check credentials, open a session and redirect home.

    Unknown usernames and wrong passwords get the same response.
    """
    client_ip = request.client.host if request.client else None
    result = auth.login(username, password, previous_token=get_session_token(request))

    if result is None:
        log_authentication_attempt(False, username=username, ip_address=client_ip)
        return templates.TemplateResponse(
            request,
            "login.html",
            {"error": LOGIN_FAILED_MESSAGE, "username": ""},
        )

    user, token = result
    request.session.clear()
    request.session[SESSION_TOKEN_KEY] = token
    log_authentication_attempt(True, username=user.username, ip_address=client_ip)
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


@router.post("/logout", dependencies=[Depends(verify_csrf_token)])
def logout(request: Request, auth: AuthService = Depends(get_auth_service)):
    """Drop the server-side session and clear the cookie"""
    token = get_session_token(request)
    if auth.logout(token):
        log_security_event(
            "logout",
            "User logged out",
            ip_address=request.client.host if request.client else None,
        )
    request.session.clear()
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
