"""Pydantic schemas for user data."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from orgguard.core.constants import MAX_NAME_LENGTH


class UserCreate(BaseModel):
    """Schema for registering a user mirrored from the identity provider."""

    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    email: EmailStr


class UserSummary(BaseModel):
    """Public user fields embedded in membership responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None
    email: str
