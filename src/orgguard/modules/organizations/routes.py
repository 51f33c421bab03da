"""Organization API routes."""

from fastapi import APIRouter, status

from orgguard.core.auth import CurrentUser
from orgguard.modules.organizations.schemas import (
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
    PermissionsResponse,
    RoleResponse,
    UserOrganizationResponse,
)
from orgguard.modules.organizations.services import OrganizationSvc


router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create organization",
    description="Create an organization. The caller becomes its first admin.",
)
async def create_organization(
    data: OrganizationCreate,
    current_user: CurrentUser,
    service: OrganizationSvc,
) -> OrganizationResponse:
    organization = await service.create_organization(current_user.id, data)
    return OrganizationResponse.model_validate(organization)


@router.get(
    "",
    response_model=list[UserOrganizationResponse],
    summary="List my organizations",
    description="Organizations the caller belongs to, with the caller's role, oldest first.",
)
async def list_my_organizations(
    current_user: CurrentUser,
    service: OrganizationSvc,
) -> list[UserOrganizationResponse]:
    rows = await service.list_user_organizations(current_user.id)
    return [
        UserOrganizationResponse(
            **OrganizationResponse.model_validate(organization).model_dump(),
            role=role,
        )
        for organization, role in rows
    ]


@router.get(
    "/{organization_id}",
    response_model=OrganizationResponse,
    summary="Get organization",
)
async def get_organization(
    organization_id: str,
    current_user: CurrentUser,
    service: OrganizationSvc,
) -> OrganizationResponse:
    organization = await service.get_organization(current_user.id, organization_id)
    return OrganizationResponse.model_validate(organization)


@router.patch(
    "/{organization_id}",
    response_model=OrganizationResponse,
    summary="Update organization",
    description="Update name and/or slug. Requires org:update.",
)
async def update_organization(
    organization_id: str,
    data: OrganizationUpdate,
    current_user: CurrentUser,
    service: OrganizationSvc,
) -> OrganizationResponse:
    organization = await service.update_organization(current_user.id, organization_id, data)
    return OrganizationResponse.model_validate(organization)


@router.get(
    "/{organization_id}/role",
    response_model=RoleResponse,
    summary="Get my role",
)
async def get_my_role(
    organization_id: str,
    current_user: CurrentUser,
    service: OrganizationSvc,
) -> RoleResponse:
    """Get the caller's role. Non-members get 404, not 403."""
    role = await service.get_role(current_user.id, organization_id)
    return RoleResponse(organization_id=organization_id, role=role)


@router.get(
    "/{organization_id}/permissions",
    response_model=PermissionsResponse,
    summary="Get my permissions",
    description="The caller's role and its permissions, for deciding what to display.",
)
async def get_my_permissions(
    organization_id: str,
    current_user: CurrentUser,
    service: OrganizationSvc,
) -> PermissionsResponse:
    role, permissions = await service.get_permissions(current_user.id, organization_id)
    return PermissionsResponse(
        organization_id=organization_id,
        role=role,
        permissions=permissions,
    )
