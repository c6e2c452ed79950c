"""Authentication schema definitions."""
from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """Stored user, including the password hash. Never rendered or returned."""

    id: int
    username: str
    password: str = Field(..., repr=False, description="bcrypt hash")

    model_config = ConfigDict(from_attributes=True)


class CurrentUser(BaseModel):
    """Identity of the authenticated user attached to a request."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True, frozen=True)
