"""Organization repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orgguard.modules.organizations.models import Organization


class OrganizationRepository:
    """Repository for Organization database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, organization: Organization) -> Organization:
        """Insert an organization and populate its ID."""
        self.session.add(organization)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization

    async def get_by_id(self, organization_id: str) -> Organization | None:
        """Get an organization by ID.

        Returns:
            Organization if found, None otherwise
        """
        stmt = select(Organization).where(Organization.id == organization_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(
        self,
        slug: str,
        exclude_id: str | None = None,
    ) -> Organization | None:
        """Get an organization by slug.

        Args:
            slug: The slug to look up
            exclude_id: Ignore this organization (used when renaming)

        Returns:
            Organization if found, None otherwise
        """
        stmt = select(Organization).where(Organization.slug == slug)
        if exclude_id:
            stmt = stmt.where(Organization.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, organization: Organization) -> Organization:
        """Flush pending changes to an organization."""
        await self.session.flush()
        await self.session.refresh(organization)
        return organization
