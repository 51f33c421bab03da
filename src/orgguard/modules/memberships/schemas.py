"""Pydantic schemas for membership operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from orgguard.core.constants import MAX_ID_LENGTH
from orgguard.core.permissions.registry import Role
from orgguard.modules.users.schemas import UserSummary


class MemberAdd(BaseModel):
    """Schema for adding an existing user to an organization."""

    user_id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)
    role: Role = Role.MEMBER


class MemberRoleUpdate(BaseModel):
    """Schema for changing a member's role."""

    role: Role


class MembershipResponse(BaseModel):
    """Schema for membership responses, including the member's profile."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    organization_id: str
    role: Role
    created_at: datetime
    updated_at: datetime
    user: UserSummary


class RemovalResponse(BaseModel):
    """Result of removing a member."""

    success: bool
