"""Home page"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from reminders.core.schemas.auth import CurrentUser
from reminders.core.templates import templates
from reminders.dependencies import get_reminder_repository
from reminders.repositories.reminders import ReminderRepository
from reminders.web.utils.auth import get_optional_user

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    repo: ReminderRepository = Depends(get_reminder_repository),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    """List of all reminders"""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"reminders": repo.list(), "current_user": current_user},
    )
