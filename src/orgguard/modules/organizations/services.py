"""Organization service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from orgguard.api.dependencies import DBSession
from orgguard.core.constants import SLUG_EXISTS_MESSAGE
from orgguard.core.errors import ConflictError, NotFoundError, ValidationError
from orgguard.core.permissions.checker import get_user_permissions
from orgguard.core.permissions.gate import AuthorizationGate
from orgguard.core.permissions.registry import Permission, Role
from orgguard.core.utils.text import generate_slug
from orgguard.modules.memberships.repos import MembershipRepository
from orgguard.modules.organizations.models import Organization
from orgguard.modules.organizations.repos import OrganizationRepository
from orgguard.modules.organizations.schemas import OrganizationCreate, OrganizationUpdate
from orgguard.modules.users.repos import UserRepository


logger = structlog.get_logger()


def _slug_conflict(slug: str) -> ConflictError:
    return ConflictError(
        SLUG_EXISTS_MESSAGE,
        error_code="slug_exists",
        details={"slug": slug},
    )


class OrganizationService:
    """Service for organization operations.

    Every method that reads or changes an existing organization passes
    through the authorization gate first.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session
        self.repo = OrganizationRepository(session)
        self.memberships = MembershipRepository(session)
        self.users = UserRepository(session)
        self.gate = AuthorizationGate(session)

    async def create_organization(
        self,
        founder_id: str,
        data: OrganizationCreate,
    ) -> Organization:
        """Create an organization with its founder as the sole ADMIN.

        The organization row and the founder's membership are written in
        one savepoint: either both exist afterwards or neither does.

        Args:
            founder_id: The creating user's ID
            data: Name and optional slug

        Returns:
            The created organization

        Raises:
            NotFoundError: If the founder does not exist
            ConflictError: If the slug is already taken
        """
        if await self.users.get_by_id(founder_id) is None:
            raise NotFoundError("User not found", resource="user", resource_id=founder_id)

        slug = data.slug or generate_slug(data.name)
        if not slug:
            raise ValidationError(
                "Cannot derive a slug from the organization name",
                details={"name": data.name},
            )
        if await self.repo.get_by_slug(slug):
            raise _slug_conflict(slug)

        try:
            async with self.session.begin_nested():
                organization = await self.repo.create(Organization(name=data.name, slug=slug))
                await self.memberships.create(founder_id, organization.id, Role.ADMIN)
        except IntegrityError as exc:
            # Lost a race for the slug between the check and the insert
            raise _slug_conflict(slug) from exc

        logger.info(
            "organization_created",
            organization_id=organization.id,
            slug=organization.slug,
            founder_id=founder_id,
        )
        return organization

    async def get_organization(self, user_id: str, organization_id: str) -> Organization:
        """Get an organization the caller belongs to.

        Raises:
            NotAMemberError: If the caller is not a member
        """
        await self.gate.authorize(user_id, organization_id, Permission.ORG_VIEW)
        return await self._get_or_404(organization_id)

    async def _get_or_404(self, organization_id: str) -> Organization:
        organization = await self.repo.get_by_id(organization_id)
        if organization is None:
            raise NotFoundError(
                "Organization not found",
                resource="organization",
                resource_id=organization_id,
            )
        return organization

    async def list_user_organizations(self, user_id: str) -> list[tuple[Organization, Role]]:
        """List the caller's organizations with their role in each.

        Ordered by when the caller joined, oldest first.
        """
        memberships = await self.memberships.list_by_user(user_id)
        return [(membership.organization, membership.role) for membership in memberships]

    async def update_organization(
        self,
        user_id: str,
        organization_id: str,
        data: OrganizationUpdate,
    ) -> Organization:
        """Update an organization's name and/or slug.

        Raises:
            NotAMemberError: If the caller is not a member
            ForbiddenError: If the caller lacks org:update
            ConflictError: If the new slug belongs to another organization
        """
        await self.gate.authorize(user_id, organization_id, Permission.ORG_UPDATE)
        organization = await self._get_or_404(organization_id)

        if data.slug and await self.repo.get_by_slug(data.slug, exclude_id=organization_id):
            raise _slug_conflict(data.slug)

        changes = data.model_dump(exclude_none=True)
        try:
            async with self.session.begin_nested():
                for field, value in changes.items():
                    setattr(organization, field, value)
        except IntegrityError as exc:
            # Only the slug carries a unique constraint
            raise _slug_conflict(data.slug or "") from exc

        organization = await self.repo.update(organization)
        logger.info(
            "organization_updated",
            organization_id=organization_id,
            actor_id=user_id,
            fields=sorted(changes),
        )
        return organization

    async def get_role(self, user_id: str, organization_id: str) -> Role:
        """Get the caller's own role; absence is reported as not-found."""
        return await self.gate.get_role_in_organization(user_id, organization_id)

    async def get_permissions(
        self,
        user_id: str,
        organization_id: str,
    ) -> tuple[Role, list[Permission]]:
        """Get the caller's role and the permissions it grants."""
        role = await self.gate.get_role_in_organization(user_id, organization_id)
        return role, get_user_permissions(role)


# Type alias for dependency injection
OrganizationSvc = Annotated[OrganizationService, Depends(OrganizationService)]
