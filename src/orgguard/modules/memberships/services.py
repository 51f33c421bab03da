"""Membership service: member listing and guarded membership mutations.

Role changes and removals keep every organization with at least one
ADMIN. The admin count and the mutation run in the caller's transaction
behind a row lock on the organization, so two concurrent demotions cannot
both observe a count of two and leave the organization without an admin.
"""

from typing import Annotated

import structlog
from fastapi import Depends

from orgguard.api.dependencies import DBSession
from orgguard.core.errors import LastAdminError, MembershipNotFoundError, NotFoundError
from orgguard.core.permissions.gate import AuthorizationGate
from orgguard.core.permissions.registry import Permission, Role
from orgguard.modules.memberships.models import Membership
from orgguard.modules.memberships.repos import MembershipRepository
from orgguard.modules.users.repos import UserRepository


logger = structlog.get_logger()


class MembershipService:
    """Service for membership operations.

    Each public method authorizes the actor through the gate before it
    reads or changes membership rows.
    """

    def __init__(self, session: DBSession) -> None:
        self.repo = MembershipRepository(session)
        self.users = UserRepository(session)
        self.gate = AuthorizationGate(session)

    async def list_members(self, user_id: str, organization_id: str) -> list[Membership]:
        """List an organization's members, oldest membership first.

        Raises:
            NotAMemberError: If the caller is not a member
            ForbiddenError: If the caller lacks member:view
        """
        await self.gate.authorize(user_id, organization_id, Permission.MEMBER_VIEW)
        return await self.repo.list_by_org(organization_id)

    async def add_member(
        self,
        actor_id: str,
        user_id: str,
        organization_id: str,
        role: Role = Role.MEMBER,
    ) -> Membership:
        """Add an existing user to an organization.

        Raises:
            NotAMemberError: If the actor is not a member
            ForbiddenError: If the actor lacks member:invite
            NotFoundError: If the user does not exist
            ConflictError: If the user is already a member
        """
        await self.gate.authorize(actor_id, organization_id, Permission.MEMBER_INVITE)

        if await self.users.get_by_id(user_id) is None:
            raise NotFoundError("User not found", resource="user", resource_id=user_id)

        membership = await self.repo.create(user_id, organization_id, role)
        logger.info(
            "member_added",
            organization_id=organization_id,
            actor_id=actor_id,
            user_id=user_id,
            role=str(role),
        )
        return membership

    async def update_member_role(
        self,
        actor_id: str,
        target_user_id: str,
        organization_id: str,
        role: Role,
    ) -> Membership:
        """Change a member's role.

        Demoting an ADMIN is refused when they are the organization's only
        ADMIN, including when the actor demotes themselves.

        Raises:
            NotAMemberError: If the actor is not a member
            ForbiddenError: If the actor lacks member:update_role
            MembershipNotFoundError: If the target is not a member
            LastAdminError: If the change would leave no ADMIN
        """
        await self.gate.authorize(actor_id, organization_id, Permission.MEMBER_UPDATE_ROLE)
        membership = await self._get_locked_target(target_user_id, organization_id)

        if membership.role == Role.ADMIN and role != Role.ADMIN:
            await self._ensure_not_last_admin(organization_id, target_user_id, actor_id)

        previous = membership.role
        membership = await self.repo.update_role(membership, role)
        logger.info(
            "member_role_updated",
            organization_id=organization_id,
            actor_id=actor_id,
            user_id=target_user_id,
            old_role=str(previous),
            new_role=str(role),
        )
        return membership

    async def remove_member(
        self,
        actor_id: str,
        target_user_id: str,
        organization_id: str,
    ) -> dict[str, bool]:
        """Remove a member from an organization.

        Removing the organization's only ADMIN is refused, including when
        the actor removes themselves.

        Raises:
            NotAMemberError: If the actor is not a member
            ForbiddenError: If the actor lacks member:remove
            MembershipNotFoundError: If the target is not a member
            LastAdminError: If the removal would leave no ADMIN
        """
        await self.gate.authorize(actor_id, organization_id, Permission.MEMBER_REMOVE)
        membership = await self._get_locked_target(target_user_id, organization_id)

        if membership.role == Role.ADMIN:
            await self._ensure_not_last_admin(organization_id, target_user_id, actor_id)

        await self.repo.delete(membership)
        logger.info(
            "member_removed",
            organization_id=organization_id,
            actor_id=actor_id,
            user_id=target_user_id,
        )
        return {"success": True}

    async def _get_locked_target(self, user_id: str, organization_id: str) -> Membership:
        # Lock before reading so the target's role and the admin count
        # are both current for the rest of the transaction.
        await self.repo.lock_organization(organization_id)
        membership = await self.repo.find_by_user_and_org(
            user_id, organization_id, refresh=True
        )
        if membership is None:
            raise MembershipNotFoundError(
                resource="membership",
                resource_id=f"{user_id}:{organization_id}",
            )
        return membership

    async def _ensure_not_last_admin(
        self,
        organization_id: str,
        target_user_id: str,
        actor_id: str,
    ) -> None:
        admin_count = await self.repo.count_admins(organization_id)
        if admin_count <= 1:
            logger.info(
                "last_admin_protected",
                organization_id=organization_id,
                actor_id=actor_id,
                user_id=target_user_id,
            )
            raise LastAdminError(details={"organization_id": organization_id})


# Type alias for dependency injection
MembershipSvc = Annotated[MembershipService, Depends(MembershipService)]
