"""Membership repository for database operations.

This is the membership store: the only place that reads or writes
membership rows.
"""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from orgguard.core.constants import MEMBERSHIP_EXISTS_MESSAGE
from orgguard.core.errors import ConflictError
from orgguard.core.permissions.registry import Role
from orgguard.modules.memberships.models import Membership
from orgguard.modules.organizations.models import Organization


class MembershipRepository:
    """Repository for Membership database operations.

    Uniqueness of the (user, organization) pair is enforced by the table's
    primary key; a violation surfaces as ``ConflictError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        user_id: str,
        organization_id: str,
        role: Role,
    ) -> Membership:
        """Create a membership.

        Args:
            user_id: The member's ID
            organization_id: The organization's ID
            role: The role to grant

        Returns:
            The created membership

        Raises:
            ConflictError: If the user is already a member of the organization
        """
        conflict = ConflictError(
            MEMBERSHIP_EXISTS_MESSAGE,
            error_code="membership_exists",
            details={"user_id": user_id, "organization_id": organization_id},
        )
        if await self.find_by_user_and_org(user_id, organization_id) is not None:
            raise conflict

        membership = Membership(user_id=user_id, organization_id=organization_id, role=role)
        try:
            # Savepoint: a concurrent duplicate rolls back this insert only
            async with self.session.begin_nested():
                self.session.add(membership)
        except IntegrityError as exc:
            raise conflict from exc
        await self.session.refresh(membership)
        return membership

    async def find_by_user_and_org(
        self,
        user_id: str,
        organization_id: str,
        *,
        refresh: bool = False,
    ) -> Membership | None:
        """Get the membership linking a user and an organization.

        Args:
            user_id: The member's ID
            organization_id: The organization's ID
            refresh: Overwrite an already loaded instance with the row as it
                is now, instead of returning the session's cached copy

        Returns:
            Membership if found, None otherwise
        """
        stmt = select(Membership).where(
            Membership.user_id == user_id,
            Membership.organization_id == organization_id,
        )
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_org(self, organization_id: str) -> list[Membership]:
        """List an organization's memberships, oldest first."""
        stmt = (
            select(Membership)
            .where(Membership.organization_id == organization_id)
            .order_by(Membership.created_at.asc(), Membership.user_id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_user(self, user_id: str) -> list[Membership]:
        """List a user's memberships, oldest first."""
        stmt = (
            select(Membership)
            .where(Membership.user_id == user_id)
            .order_by(Membership.created_at.asc(), Membership.organization_id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update_role(self, membership: Membership, role: Role) -> Membership:
        """Change a membership's role.

        Args:
            membership: The membership to change
            role: The new role

        Returns:
            The updated membership
        """
        membership.role = role
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def delete(self, membership: Membership) -> None:
        """Delete a membership."""
        await self.session.delete(membership)
        await self.session.flush()

    async def count_admins(self, organization_id: str) -> int:
        """Count the ADMIN memberships of an organization."""
        stmt = (
            select(func.count())
            .select_from(Membership)
            .where(
                Membership.organization_id == organization_id,
                Membership.role == Role.ADMIN,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def lock_organization(self, organization_id: str) -> None:
        """Lock the organization row until the current transaction ends.

        Membership mutations that check the admin count take this lock
        first, so concurrent demotions or removals in one organization run
        one after another instead of each seeing a stale count.
        """
        stmt = select(Organization.id).where(Organization.id == organization_id).with_for_update()
        await self.session.execute(stmt)
