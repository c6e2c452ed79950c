"""Reminder web routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from reminders.core.exceptions import ReminderNotFoundError, ReminderValidationError
from reminders.core.schemas.auth import CurrentUser
from reminders.core.schemas.reminder import ReminderCreate
from reminders.core.templates import templates
from reminders.dependencies import get_reminder_repository
from reminders.repositories.reminders import ReminderRepository
from reminders.web.utils.auth import get_optional_user, require_user
from reminders.web.utils.csrf import verify_csrf_token

logger = logging.getLogger(__name__)

router = APIRouter()


def _form_errors(exc: ValidationError) -> list:
    messages = []
    for error in exc.errors():
        field = error["loc"][0] if error["loc"] else "input"
        messages.append(f"{str(field).capitalize()} is required")
    return messages


@router.get("/create", response_class=HTMLResponse)
def create_form(request: Request, current_user: CurrentUser = Depends(require_user)):
    """Empty create form"""
    return templates.TemplateResponse(
        request,
        "create.html",
        {"current_user": current_user, "errors": [], "form": {}},
    )


@router.post("/create")
def create_reminder(
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    current_user: CurrentUser = Depends(require_user),
    _csrf: None = Depends(verify_csrf_token),
    repo: ReminderRepository = Depends(get_reminder_repository),
):
    """Create a reminder from the form and redirect to its page"""
    form = {"title": title or "", "description": description or ""}
    try:
        reminder_in = ReminderCreate.model_validate(
            {"title": title, "description": description}
        )
        reminder = repo.create(reminder_in.title, reminder_in.description)
    except ValidationError as e:
        return templates.TemplateResponse(
            request,
            "create.html",
            {"current_user": current_user, "errors": _form_errors(e), "form": form},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except ReminderValidationError as e:
        return templates.TemplateResponse(
            request,
            "create.html",
            {"current_user": current_user, "errors": [str(e)], "form": form},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    logger.info(
        "Reminder created from web form",
        extra={"reminder_id": reminder.id, "user_id": current_user.id},
    )
    return RedirectResponse(
        url=f"/reminder/{reminder.id}", status_code=status.HTTP_302_FOUND
    )


@router.get("/reminder/{reminder_id}", response_class=HTMLResponse)
def reminder_detail(
    request: Request,
    reminder_id: int,
    repo: ReminderRepository = Depends(get_reminder_repository),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    """Detail view of a single reminder"""
    try:
        reminder = repo.get_by_id(reminder_id)
    except ReminderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    return templates.TemplateResponse(
        request,
        "reminder.html",
        {"reminder": reminder, "current_user": current_user},
    )
