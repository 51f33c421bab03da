"""Authorization gate.

Every organization-scoped operation calls ``authorize`` before touching
data. The gate resolves the caller's membership in the organization and
checks the required permission against the caller's role.
"""

from collections.abc import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from orgguard.core.errors import ForbiddenError, MembershipNotFoundError, NotAMemberError
from orgguard.core.permissions.checker import has_any_permission
from orgguard.core.permissions.registry import Permission, Role
from orgguard.modules.memberships.repos import MembershipRepository


logger = structlog.get_logger()

RequiredPermissions = Permission | Sequence[Permission]


def _as_list(permissions: RequiredPermissions) -> list[Permission]:
    if isinstance(permissions, str):
        return [permissions]
    required = list(permissions)
    if not required:
        raise ValueError("At least one permission is required")
    return required


class AuthorizationGate:
    """Resolves a caller's role in an organization and enforces permissions."""

    def __init__(self, session: AsyncSession) -> None:
        self.memberships = MembershipRepository(session)

    async def authorize(
        self,
        user_id: str,
        organization_id: str,
        permissions: RequiredPermissions,
    ) -> Role:
        """Check that a user may act on an organization.

        A list of permissions is satisfied when the role holds any one of
        them. Callers that need several permissions must authorize once per
        permission.

        Args:
            user_id: The acting user's ID
            organization_id: The organization being acted on
            permissions: A permission, or a non-empty list of alternatives

        Returns:
            The caller's role in the organization

        Raises:
            NotAMemberError: If the caller has no membership in the organization
            ForbiddenError: If the caller's role lacks the permission(s)
            ValueError: If an empty list of permissions is given
        """
        required = _as_list(permissions)

        membership = await self.memberships.find_by_user_and_org(
            user_id, organization_id, refresh=True
        )
        if membership is None:
            logger.info(
                "authorization_denied",
                reason="not_a_member",
                user_id=user_id,
                organization_id=organization_id,
            )
            raise NotAMemberError(details={"organization_id": organization_id})

        if not has_any_permission(membership.role, required):
            perm_strs = [str(p) for p in required]
            logger.info(
                "authorization_denied",
                reason="permission_denied",
                user_id=user_id,
                organization_id=organization_id,
                role=str(membership.role),
                required_permissions=perm_strs,
            )
            raise ForbiddenError(details={"required_permissions": perm_strs})

        return membership.role

    async def get_role_in_organization(self, user_id: str, organization_id: str) -> Role:
        """Get the caller's own role in an organization.

        Requires nothing beyond membership, and reports absence as
        not-found rather than forbidden.

        Raises:
            MembershipNotFoundError: If the user is not a member
        """
        membership = await self.memberships.find_by_user_and_org(
            user_id, organization_id, refresh=True
        )
        if membership is None:
            raise MembershipNotFoundError(
                resource="membership",
                resource_id=f"{user_id}:{organization_id}",
            )
        return membership.role


async def authorize(
    session: AsyncSession,
    user_id: str,
    organization_id: str,
    permissions: RequiredPermissions,
) -> Role:
    """Convenience wrapper around ``AuthorizationGate.authorize``."""
    return await AuthorizationGate(session).authorize(user_id, organization_id, permissions)


async def get_role_in_organization(
    session: AsyncSession,
    user_id: str,
    organization_id: str,
) -> Role:
    """Convenience wrapper around ``AuthorizationGate.get_role_in_organization``."""
    return await AuthorizationGate(session).get_role_in_organization(user_id, organization_id)
