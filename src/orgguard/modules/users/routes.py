"""User API routes."""

from fastapi import APIRouter

from orgguard.core.auth import CurrentUser
from orgguard.modules.users.schemas import UserSummary


router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=UserSummary,
    summary="Get current user",
    description="The user the forwarded identity resolves to.",
)
async def get_me(current_user: CurrentUser) -> UserSummary:
    return UserSummary.model_validate(current_user)
