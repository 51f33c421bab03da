"""Organization database models."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orgguard.core.constants import MAX_NAME_LENGTH, MAX_SLUG_LENGTH
from orgguard.core.database.base import Base, IdMixin, TimestampMixin


if TYPE_CHECKING:
    from orgguard.modules.memberships.models import Membership


class Organization(Base, IdMixin, TimestampMixin):
    """Organization model, the tenant boundary.

    An organization is always created together with its founder's ADMIN
    membership. Deleting it removes all of its memberships.

    Attributes:
        name: Display name
        slug: Unique URL identifier
    """

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )

    # Relationships
    memberships: Mapped[list["Membership"]] = relationship(
        "Membership",
        back_populates="organization",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, slug={self.slug})>"
