"""FastAPI dependencies that run the authorization gate for a route.

Services already authorize every call they serve. These dependencies are
for routes that act on an organization without a service of their own:

    @router.get("/organizations/{organization_id}/expenses")
    async def list_expenses(
        role: Annotated[Role, Depends(require_permission(Permission.EXPENSE_VIEW_OWN))],
    ):
        ...

The organization is taken from the ``organization_id`` path parameter.
"""

from collections.abc import Awaitable, Callable

from orgguard.api.dependencies import DBSession
from orgguard.core.auth import CurrentUser
from orgguard.core.permissions.gate import AuthorizationGate
from orgguard.core.permissions.registry import Permission, Role


def require_permission(*permissions: Permission) -> Callable[..., Awaitable[Role]]:
    """Build a dependency that requires any one of ``permissions``.

    Args:
        permissions: Alternatives; the caller's role must hold at least one

    Returns:
        A dependency resolving to the caller's role in the organization

    Raises:
        ValueError: If no permission is given
    """
    if not permissions:
        raise ValueError("At least one permission is required")
    required = list(permissions)

    async def dependency(
        organization_id: str,
        current_user: CurrentUser,
        db: DBSession,
    ) -> Role:
        return await AuthorizationGate(db).authorize(current_user.id, organization_id, required)

    return dependency


def require_all_permissions(*permissions: Permission) -> Callable[..., Awaitable[Role]]:
    """Build a dependency that requires every one of ``permissions``.

    The gate is consulted once per permission, so the first missing one
    is the one reported.
    """
    if not permissions:
        raise ValueError("At least one permission is required")

    async def dependency(
        organization_id: str,
        current_user: CurrentUser,
        db: DBSession,
    ) -> Role:
        gate = AuthorizationGate(db)
        roles = [
            await gate.authorize(current_user.id, organization_id, permission)
            for permission in permissions
        ]
        return roles[-1]

    return dependency
