"""Membership database models."""

from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orgguard.core.constants import MAX_ID_LENGTH
from orgguard.core.database.base import Base, TimestampMixin
from orgguard.core.permissions.registry import Role


if TYPE_CHECKING:
    from orgguard.modules.organizations.models import Organization
    from orgguard.modules.users.models import User


class Membership(Base, TimestampMixin):
    """A user's role within one organization.

    The composite primary key guarantees a user holds exactly one role per
    organization. Both foreign keys cascade, so the row disappears with
    either the user or the organization.

    Attributes:
        user_id: The member
        organization_id: The organization
        role: ADMIN or MEMBER
    """

    __tablename__ = "memberships"

    user_id: Mapped[str] = mapped_column(
        String(MAX_ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    organization_id: Mapped[str] = mapped_column(
        String(MAX_ID_LENGTH),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="membership_role"),
        nullable=False,
        default=Role.MEMBER,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="memberships",
        lazy="selectin",
    )
    organization: Mapped["Organization"] = relationship(
        "Organization",
        back_populates="memberships",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<Membership(user_id={self.user_id}, "
            f"organization_id={self.organization_id}, role={self.role})>"
        )
