"""User database models."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orgguard.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from orgguard.core.database.base import Base, IdMixin, TimestampMixin


if TYPE_CHECKING:
    from orgguard.modules.memberships.models import Membership


class User(Base, IdMixin, TimestampMixin):
    """User model mirroring an identity from the session provider.

    Users are created and deleted by the identity subsystem; this service
    only reads them. Deleting a user removes all of their memberships.

    Attributes:
        name: Display name
        email: Unique email address
    """

    __tablename__ = "users"

    name: Mapped[str | None] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=True,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )

    # Relationships
    memberships: Mapped[list["Membership"]] = relationship(
        "Membership",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
