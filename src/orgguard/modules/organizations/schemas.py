"""Pydantic schemas for organization operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from orgguard.core.constants import MAX_NAME_LENGTH, MAX_SLUG_LENGTH
from orgguard.core.permissions.registry import Permission, Role
from orgguard.core.utils.text import is_valid_slug


def validate_slug(slug: str | None) -> str | None:
    """Reject slugs that are not URL-safe.

    Raises:
        ValueError: If the slug has characters other than lowercase
            letters, digits and single hyphens
    """
    if slug is not None and not is_valid_slug(slug):
        raise ValueError("Slug may only contain lowercase letters, digits and single hyphens")
    return slug


class OrganizationCreate(BaseModel):
    """Schema for creating an organization.

    When ``slug`` is omitted it is generated from ``name``.
    """

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(default=None, min_length=1, max_length=MAX_SLUG_LENGTH)

    @field_validator("slug")
    @classmethod
    def slug_format(cls, v: str | None) -> str | None:
        """Validate slug format."""
        return validate_slug(v)


class OrganizationUpdate(BaseModel):
    """Schema for updating an organization. Omitted fields are left as is."""

    name: str | None = Field(default=None, min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(default=None, min_length=1, max_length=MAX_SLUG_LENGTH)

    @field_validator("slug")
    @classmethod
    def slug_format(cls, v: str | None) -> str | None:
        """Validate slug format."""
        return validate_slug(v)


class OrganizationResponse(BaseModel):
    """Schema for organization responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime


class UserOrganizationResponse(OrganizationResponse):
    """An organization together with the caller's role in it."""

    role: Role


class RoleResponse(BaseModel):
    """The caller's role in an organization."""

    organization_id: str
    role: Role


class PermissionsResponse(RoleResponse):
    """The caller's role and the permissions it grants."""

    permissions: list[Permission]
