"""
Reminder JSON API.

Create, list and fetch reminders. Request bodies are validated with the
same `ReminderCreate` schema the web form uses.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from reminders.core.exceptions import ReminderNotFoundError, ReminderValidationError
from reminders.core.schemas.reminder import Reminder, ReminderCreate
from reminders.dependencies import get_reminder_repository
from reminders.repositories.reminders import ReminderRepository

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Reminders"],
    responses={
        404: {"description": "Not found"},
        500: {"description": "Internal server error"},
    },
)


@router.get(
    "",
    response_model=List[Reminder],
    summary="List Reminders",
    response_description="All reminders in insertion order",
)
def list_reminders(
    repo: ReminderRepository = Depends(get_reminder_repository),
) -> List[Reminder]:
    """
    List all reminders. Returns an empty array when there are none.
    """
    return repo.list()


@router.post(
    "/create",
    response_model=Reminder,
    summary="Create Reminder",
    response_description="Newly created reminder",
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing or blank title/description"},
    },
)
def create_reminder(
    reminder: ReminderCreate,
    repo: ReminderRepository = Depends(get_reminder_repository),
) -> Reminder:
    """
    Create a new reminder.
    """
    try:
        created = repo.create(reminder.title, reminder.description)
    except ReminderValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    logger.info("Reminder created via API", extra={"reminder_id": created.id})
    return created


@router.get(
    "/{reminder_id}",
    response_model=Reminder,
    summary="Get Reminder",
    responses={404: {"description": "Reminder not found"}},
)
def get_reminder(
    reminder_id: int,
    repo: ReminderRepository = Depends(get_reminder_repository),
) -> Reminder:
    """
    Get a single reminder by id.
    """
    try:
        return repo.get_by_id(reminder_id)
    except ReminderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
