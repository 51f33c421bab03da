"""Integration tests for the membership service.

These tests verify that:
- Every mutation is authorized before anything is read or written
- An organization always keeps at least one ADMIN
- Members are listed oldest first
"""

import pytest
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from orgguard.core.errors import (
    ConflictError,
    ForbiddenError,
    LastAdminError,
    MembershipNotFoundError,
    NotAMemberError,
    NotFoundError,
)
from orgguard.core.permissions.registry import Role
from orgguard.modules.memberships.models import Membership
from orgguard.modules.memberships.repos import MembershipRepository
from orgguard.modules.memberships.services import MembershipService
from orgguard.modules.organizations.models import Organization
from orgguard.modules.users.models import User
from tests.factories.user import create_user


pytestmark = pytest.mark.integration

LAST_ADMIN = "Cannot remove the last admin from an organization"


@pytest.fixture
def service(db: AsyncSession) -> MembershipService:
    return MembershipService(db)


class TestLastAdminInvariant:
    """An organization with one ADMIN can neither demote nor remove them."""

    async def test_sole_admin_cannot_self_demote(
        self, service: MembershipService, organization: Organization, admin: User
    ):
        with pytest.raises(LastAdminError) as exc_info:
            await service.update_member_role(admin.id, admin.id, organization.id, Role.MEMBER)

        assert exc_info.value.message == LAST_ADMIN
        assert exc_info.value.status_code == 403

    async def test_sole_admin_cannot_self_remove(
        self,
        db: AsyncSession,
        service: MembershipService,
        organization: Organization,
        admin: User,
    ):
        with pytest.raises(LastAdminError) as exc_info:
            await service.remove_member(admin.id, admin.id, organization.id)

        assert exc_info.value.message == LAST_ADMIN
        remaining = await MembershipRepository(db).find_by_user_and_org(admin.id, organization.id)
        assert remaining is not None
        assert remaining.role == Role.ADMIN

    async def test_keeping_admin_role_is_allowed(
        self, service: MembershipService, organization: Organization, admin: User
    ):
        """ADMIN to ADMIN is not a demotion."""
        result = await service.update_member_role(
            admin.id, admin.id, organization.id, Role.ADMIN
        )

        assert result.role == Role.ADMIN

    async def test_second_admin_unlocks_demotion_and_removal(
        self,
        db: AsyncSession,
        service: MembershipService,
        organization: Organization,
        admin: User,
        membership: Membership,
    ):
        await service.update_member_role(
            admin.id, membership.user_id, organization.id, Role.ADMIN
        )

        demoted = await service.update_member_role(
            admin.id, membership.user_id, organization.id, Role.MEMBER
        )
        assert demoted.role == Role.MEMBER

        await service.update_member_role(
            admin.id, membership.user_id, organization.id, Role.ADMIN
        )
        result = await service.remove_member(admin.id, admin.id, organization.id)

        assert result == {"success": True}
        repo = MembershipRepository(db)
        assert await repo.find_by_user_and_org(admin.id, organization.id) is None
        assert await repo.count_admins(organization.id) == 1

    async def test_promote_then_self_demote(
        self,
        db: AsyncSession,
        service: MembershipService,
        organization: Organization,
        admin: User,
        membership: Membership,
    ):
        """Founder promotes a member, then steps down while they remain ADMIN."""
        promoted = await service.update_member_role(
            admin.id, membership.user_id, organization.id, Role.ADMIN
        )
        assert promoted.role == Role.ADMIN

        demoted = await service.update_member_role(
            admin.id, admin.id, organization.id, Role.MEMBER
        )

        assert demoted.role == Role.MEMBER
        assert await MembershipRepository(db).count_admins(organization.id) == 1

    async def test_removing_a_member_is_unaffected(
        self,
        db: AsyncSession,
        service: MembershipService,
        organization: Organization,
        admin: User,
        membership: Membership,
    ):
        result = await service.remove_member(admin.id, membership.user_id, organization.id)

        assert result == {"success": True}
        assert await MembershipRepository(db).count_admins(organization.id) == 1


class TestAdminCountIsSerialized:
    """The guard locks the organization before it reads what it checks.

    SQLite ignores ``FOR UPDATE``, so this only pins the call order; the
    lock's SQL is checked in the repository tests. Blocking between two
    PostgreSQL transactions is not exercised here.
    """

    async def test_lock_precedes_target_lookup_and_count(
        self,
        service: MembershipService,
        organization: Organization,
        admin: User,
        monkeypatch: pytest.MonkeyPatch,
    ):
        calls: list[str] = []
        for name in ("lock_organization", "find_by_user_and_org", "count_admins"):
            original = getattr(service.repo, name)

            async def spy(*args, _name=name, _original=original, **kwargs):
                calls.append(_name)
                return await _original(*args, **kwargs)

            monkeypatch.setattr(service.repo, name, spy)

        with pytest.raises(LastAdminError):
            await service.remove_member(admin.id, admin.id, organization.id)

        assert calls == ["lock_organization", "find_by_user_and_org", "count_admins"]


async def _demote_behind_session(db: AsyncSession, user_id: str, organization_id: str) -> None:
    """Demote a member the way another transaction would, leaving loaded objects stale."""
    await db.execute(
        update(Membership)
        .where(Membership.user_id == user_id, Membership.organization_id == organization_id)
        .values(role=Role.MEMBER)
        .execution_options(synchronize_session=False)
    )


class TestConcurrentDemotion:
    """Roles changed by another transaction are seen, not the session's cached copy."""

    @pytest.fixture
    async def co_admin(self, db: AsyncSession, organization: Organization) -> User:
        user = await create_user(db, email="co-admin@example.com", name="Cleo Coadmin")
        await MembershipRepository(db).create(user.id, organization.id, Role.ADMIN)
        return user

    async def test_target_role_is_reread_after_lock(
        self,
        db: AsyncSession,
        service: MembershipService,
        organization: Organization,
        admin: User,
        co_admin: User,
    ):
        """A target already demoted elsewhere is removed without a last-admin check."""
        cached = await MembershipRepository(db).find_by_user_and_org(co_admin.id, organization.id)
        assert cached.role == Role.ADMIN
        await _demote_behind_session(db, co_admin.id, organization.id)

        result = await service.remove_member(admin.id, co_admin.id, organization.id)

        assert result == {"success": True}
        assert await MembershipRepository(db).count_admins(organization.id) == 1

    async def test_demoted_actor_loses_admin_permissions(
        self,
        db: AsyncSession,
        service: MembershipService,
        organization: Organization,
        admin: User,
        co_admin: User,
    ):
        cached = await MembershipRepository(db).find_by_user_and_org(admin.id, organization.id)
        assert cached.role == Role.ADMIN
        await _demote_behind_session(db, admin.id, organization.id)

        with pytest.raises(ForbiddenError) as exc_info:
            await service.remove_member(admin.id, co_admin.id, organization.id)

        assert exc_info.value.error_code == "permission_denied"


class TestMutationAuthorization:
    """Mutations are authorized against the actor before the target is examined."""

    async def test_member_cannot_change_roles(
        self,
        service: MembershipService,
        organization: Organization,
        admin: User,
        membership: Membership,
    ):
        with pytest.raises(ForbiddenError) as exc_info:
            await service.update_member_role(
                membership.user_id, membership.user_id, organization.id, Role.ADMIN
            )

        assert exc_info.value.error_code == "permission_denied"

    async def test_member_removing_last_admin_gets_permission_error(
        self,
        service: MembershipService,
        organization: Organization,
        admin: User,
        membership: Membership,
    ):
        """The actor's missing permission is reported, not the last-admin rule."""
        with pytest.raises(ForbiddenError) as exc_info:
            await service.remove_member(membership.user_id, admin.id, organization.id)

        assert not isinstance(exc_info.value, LastAdminError)
        assert exc_info.value.message == "You don't have permission to perform this action"

    async def test_outsider_is_not_a_member(
        self,
        service: MembershipService,
        organization: Organization,
        admin: User,
        outsider: User,
    ):
        with pytest.raises(NotAMemberError):
            await service.remove_member(outsider.id, admin.id, organization.id)

    async def test_target_must_be_a_member(
        self,
        service: MembershipService,
        organization: Organization,
        admin: User,
        outsider: User,
    ):
        with pytest.raises(MembershipNotFoundError):
            await service.update_member_role(
                admin.id, outsider.id, organization.id, Role.ADMIN
            )

        with pytest.raises(MembershipNotFoundError):
            await service.remove_member(admin.id, outsider.id, organization.id)


class TestListMembers:
    """Tests for MembershipService.list_members."""

    async def test_lists_oldest_first(
        self,
        db: AsyncSession,
        service: MembershipService,
        organization: Organization,
        admin: User,
        membership: Membership,
    ):
        late = await create_user(db)
        await MembershipRepository(db).create(late.id, organization.id, Role.MEMBER)

        first = await service.list_members(membership.user_id, organization.id)
        second = await service.list_members(admin.id, organization.id)

        assert [m.user_id for m in first] == [admin.id, membership.user_id, late.id]
        assert [m.user_id for m in second] == [m.user_id for m in first]

    async def test_outsider_cannot_list(
        self, service: MembershipService, organization: Organization, outsider: User
    ):
        with pytest.raises(NotAMemberError):
            await service.list_members(outsider.id, organization.id)


class TestAddMember:
    """Tests for MembershipService.add_member."""

    async def test_admin_adds_member(
        self,
        service: MembershipService,
        organization: Organization,
        admin: User,
        outsider: User,
    ):
        result = await service.add_member(admin.id, outsider.id, organization.id)

        assert result.role == Role.MEMBER
        assert result.user.id == outsider.id

    async def test_admin_adds_admin(
        self,
        service: MembershipService,
        organization: Organization,
        admin: User,
        outsider: User,
    ):
        result = await service.add_member(admin.id, outsider.id, organization.id, Role.ADMIN)

        assert result.role == Role.ADMIN

    async def test_member_cannot_invite(
        self,
        service: MembershipService,
        organization: Organization,
        membership: Membership,
        outsider: User,
    ):
        with pytest.raises(ForbiddenError):
            await service.add_member(membership.user_id, outsider.id, organization.id)

    async def test_unknown_user(
        self, service: MembershipService, organization: Organization, admin: User
    ):
        with pytest.raises(NotFoundError) as exc_info:
            await service.add_member(admin.id, "no-such-user", organization.id)

        assert exc_info.value.message == "User not found"

    async def test_existing_member_conflicts(
        self,
        service: MembershipService,
        organization: Organization,
        admin: User,
        membership: Membership,
    ):
        with pytest.raises(ConflictError) as exc_info:
            await service.add_member(admin.id, membership.user_id, organization.id)

        assert exc_info.value.error_code == "membership_exists"
