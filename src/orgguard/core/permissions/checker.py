"""Permission checking logic.

Pure functions that evaluate a role against the permission registry.
They perform no I/O and never raise: an unknown or missing role simply
holds no permissions.
"""

from collections.abc import Iterable

from orgguard.core.permissions.registry import ROLE_PERMISSIONS, Permission, Role


def get_role_permissions(role: Role | str | None) -> frozenset[Permission]:
    """Get all permissions granted to a role.

    Args:
        role: The role to look up

    Returns:
        The role's permissions, or an empty set for an unknown role
    """
    if role is None:
        return frozenset()
    return ROLE_PERMISSIONS.get(role, frozenset())  # type: ignore[call-overload]


def has_permission(role: Role | str | None, permission: Permission | str) -> bool:
    """Check if a role grants a specific permission.

    Args:
        role: The role to check
        permission: The permission to look for

    Returns:
        True if the role grants the permission, False otherwise
    """
    return permission in get_role_permissions(role)


def has_any_permission(
    role: Role | str | None,
    permissions: Iterable[Permission | str],
) -> bool:
    """Check if a role grants at least one of the permissions."""
    granted = get_role_permissions(role)
    return any(permission in granted for permission in permissions)


def has_all_permissions(
    role: Role | str | None,
    permissions: Iterable[Permission | str],
) -> bool:
    """Check if a role grants every one of the permissions."""
    granted = get_role_permissions(role)
    return all(permission in granted for permission in permissions)


# ============================================================
# Presentation helpers
# ============================================================
#
# These mirror the server-side checks so clients can decide what to show.
# They are advisory only; the authorization gate is the enforcement point.


def can_user_perform(role: Role | str | None, permission: Permission | str) -> bool:
    """Whether a (possibly unknown) role may perform an action."""
    if not role:
        return False
    return has_permission(role, permission)


def can_user_perform_any(
    role: Role | str | None,
    permissions: Iterable[Permission | str],
) -> bool:
    if not role:
        return False
    return has_any_permission(role, permissions)


def can_user_perform_all(
    role: Role | str | None,
    permissions: Iterable[Permission | str],
) -> bool:
    if not role:
        return False
    return has_all_permissions(role, permissions)


def get_user_permissions(role: Role | str | None) -> list[Permission]:
    """List a role's permissions in registry declaration order.

    Unlike ``get_role_permissions`` the result is ordered, which keeps
    rendered permission lists stable.
    """
    granted = get_role_permissions(role)
    return [permission for permission in Permission if permission in granted]
