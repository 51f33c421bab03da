"""Permission registry.

The closed set of roles and permissions, and the table mapping each role
to the permissions it grants. The table is built once at import time and
is read-only; adding a role or permission means editing this module.
"""

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType


class Role(StrEnum):
    """Role a user holds within one organization."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class Permission(StrEnum):
    """Fine-grained capability, namespaced as ``resource:action``."""

    # Organization permissions
    ORG_VIEW = "org:view"
    ORG_UPDATE = "org:update"
    ORG_DELETE = "org:delete"

    # Member management permissions
    MEMBER_VIEW = "member:view"
    MEMBER_INVITE = "member:invite"
    MEMBER_UPDATE_ROLE = "member:update_role"
    MEMBER_REMOVE = "member:remove"

    # Expense permissions
    EXPENSE_CREATE = "expense:create"
    EXPENSE_VIEW_OWN = "expense:view_own"
    EXPENSE_VIEW_ALL = "expense:view_all"
    EXPENSE_UPDATE_OWN = "expense:update_own"
    EXPENSE_UPDATE_ALL = "expense:update_all"
    EXPENSE_DELETE_OWN = "expense:delete_own"
    EXPENSE_DELETE_ALL = "expense:delete_all"

    # Policy permissions
    POLICY_VIEW = "policy:view"
    POLICY_CREATE = "policy:create"
    POLICY_UPDATE = "policy:update"
    POLICY_DELETE = "policy:delete"

    @property
    def resource(self) -> str:
        """The resource namespace, e.g. ``member`` for ``member:remove``."""
        return self.value.split(":", 1)[0]

    @property
    def action(self) -> str:
        """The action part, e.g. ``remove`` for ``member:remove``."""
        return self.value.split(":", 1)[1]


ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = MappingProxyType(
    {
        Role.ADMIN: frozenset(Permission),
        Role.MEMBER: frozenset(
            {
                Permission.ORG_VIEW,
                Permission.MEMBER_VIEW,
                Permission.EXPENSE_CREATE,
                Permission.EXPENSE_VIEW_OWN,
                Permission.EXPENSE_UPDATE_OWN,
                Permission.EXPENSE_DELETE_OWN,
                Permission.POLICY_VIEW,
            }
        ),
    }
)


# Common permission groups
ORG_ADMIN_PERMISSIONS: tuple[Permission, ...] = (
    Permission.ORG_UPDATE,
    Permission.ORG_DELETE,
    Permission.MEMBER_INVITE,
    Permission.MEMBER_UPDATE_ROLE,
    Permission.MEMBER_REMOVE,
)

MEMBER_MANAGEMENT_PERMISSIONS: tuple[Permission, ...] = (
    Permission.MEMBER_VIEW,
    Permission.MEMBER_INVITE,
    Permission.MEMBER_UPDATE_ROLE,
    Permission.MEMBER_REMOVE,
)

EXPENSE_MANAGEMENT_PERMISSIONS: tuple[Permission, ...] = (
    Permission.EXPENSE_CREATE,
    Permission.EXPENSE_VIEW_OWN,
    Permission.EXPENSE_UPDATE_OWN,
    Permission.EXPENSE_DELETE_OWN,
)

EXPENSE_ADMIN_PERMISSIONS: tuple[Permission, ...] = (
    *EXPENSE_MANAGEMENT_PERMISSIONS,
    Permission.EXPENSE_VIEW_ALL,
    Permission.EXPENSE_UPDATE_ALL,
    Permission.EXPENSE_DELETE_ALL,
)
