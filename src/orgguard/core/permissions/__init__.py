"""Role-based permissions scoped to organizations.

The role table is fixed at import time. ``gate`` builds on it to check a
caller's membership; import it directly from ``orgguard.core.permissions.gate``.
"""

from orgguard.core.permissions.checker import (
    can_user_perform,
    can_user_perform_all,
    can_user_perform_any,
    get_role_permissions,
    get_user_permissions,
    has_all_permissions,
    has_any_permission,
    has_permission,
)
from orgguard.core.permissions.registry import (
    EXPENSE_ADMIN_PERMISSIONS,
    EXPENSE_MANAGEMENT_PERMISSIONS,
    MEMBER_MANAGEMENT_PERMISSIONS,
    ORG_ADMIN_PERMISSIONS,
    ROLE_PERMISSIONS,
    Permission,
    Role,
)


__all__ = [
    # Permission groups
    "EXPENSE_ADMIN_PERMISSIONS",
    "EXPENSE_MANAGEMENT_PERMISSIONS",
    "MEMBER_MANAGEMENT_PERMISSIONS",
    "ORG_ADMIN_PERMISSIONS",
    "ROLE_PERMISSIONS",
    "Permission",
    "Role",
    # Checks
    "can_user_perform",
    "can_user_perform_all",
    "can_user_perform_any",
    "get_role_permissions",
    "get_user_permissions",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
]
