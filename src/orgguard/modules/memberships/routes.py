"""Membership API routes."""

from fastapi import APIRouter, status

from orgguard.core.auth import CurrentUser
from orgguard.modules.memberships.schemas import (
    MemberAdd,
    MemberRoleUpdate,
    MembershipResponse,
    RemovalResponse,
)
from orgguard.modules.memberships.services import MembershipSvc


router = APIRouter(prefix="/organizations/{organization_id}/members", tags=["members"])


@router.get(
    "",
    response_model=list[MembershipResponse],
    summary="List members",
    description="Members of the organization, oldest membership first. Requires member:view.",
)
async def list_members(
    organization_id: str,
    current_user: CurrentUser,
    service: MembershipSvc,
) -> list[MembershipResponse]:
    memberships = await service.list_members(current_user.id, organization_id)
    return [MembershipResponse.model_validate(m) for m in memberships]


@router.post(
    "",
    response_model=MembershipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add member",
    description="Add an existing user to the organization. Requires member:invite.",
)
async def add_member(
    organization_id: str,
    data: MemberAdd,
    current_user: CurrentUser,
    service: MembershipSvc,
) -> MembershipResponse:
    membership = await service.add_member(
        current_user.id, data.user_id, organization_id, data.role
    )
    return MembershipResponse.model_validate(membership)


@router.patch(
    "/{user_id}",
    response_model=MembershipResponse,
    summary="Update member role",
    description="Change a member's role. Requires member:update_role.",
)
async def update_member_role(
    organization_id: str,
    user_id: str,
    data: MemberRoleUpdate,
    current_user: CurrentUser,
    service: MembershipSvc,
) -> MembershipResponse:
    membership = await service.update_member_role(
        current_user.id, user_id, organization_id, data.role
    )
    return MembershipResponse.model_validate(membership)


@router.delete(
    "/{user_id}",
    response_model=RemovalResponse,
    summary="Remove member",
    description="Remove a member from the organization. Requires member:remove.",
)
async def remove_member(
    organization_id: str,
    user_id: str,
    current_user: CurrentUser,
    service: MembershipSvc,
) -> RemovalResponse:
    result = await service.remove_member(current_user.id, user_id, organization_id)
    return RemovalResponse(**result)
