"""CSRF protection for the HTML forms.

Pages embed a signed token with the `csrf_token()` template global. Form
routes that change state take `verify_csrf_token` as a dependency, which
accepts the token from the `csrf_token` form field or the `X-CSRF-Token`
header. Tokens are bound to the session token, so a token rendered for an
anonymous visitor stops validating once they log in, and vice versa.
"""

from typing import Optional

from fastapi import Form, Header, HTTPException, Request, status
from jinja2 import pass_context

from reminders.core.logging_config import log_csrf_validation_failure
from reminders.core.security import generate_csrf_token, validate_csrf_token
from reminders.web.utils.auth import get_session_token


def _binding(request: Request) -> str:
    return get_session_token(request) or ""


def csrf_token_for(request: Request) -> str:
    return generate_csrf_token(request.app.state.secret_key, _binding(request))


@pass_context
def csrf_token(context) -> str:
    """Template global: a fresh token for the request being rendered"""
    return csrf_token_for(context["request"])


def verify_csrf_token(
    request: Request,
    form_token: Optional[str] = Form(None, alias="csrf_token"),
    x_csrf_token: Optional[str] = Header(None),
) -> None:
    """Dependency rejecting form posts without a valid token.

    Raises:
        HTTPException: 403 when the token is missing, forged or expired.
    """
    token = form_token or x_csrf_token
    if not validate_csrf_token(token, request.app.state.secret_key, _binding(request)):
        log_csrf_validation_failure(
            ip_address=request.client.host if request.client else None,
            endpoint=request.url.path,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="CSRF token validation failed",
        )
