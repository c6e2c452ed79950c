"""Reminder schema definitions."""
from pydantic import BaseModel, ConfigDict, Field


class ReminderBase(BaseModel):
    """Base schema for Reminder"""

    title: str = Field(..., description="Reminder title")
    description: str = Field(..., description="Reminder description")


class ReminderCreate(ReminderBase):
    """Schema for creating a Reminder.

    Shared by the JSON API and the web form so both reject blank fields.
    """

    model_config = ConfigDict(str_strip_whitespace=True, strict=True)

    title: str = Field(..., min_length=1, description="Reminder title")
    description: str = Field(..., min_length=1, description="Reminder description")


class Reminder(ReminderBase):
    """Schema for Reminder response"""

    id: int

    model_config = ConfigDict(from_attributes=True)

