"""Users known to the authorization core.

Users are created by the upstream identity provider; this module stores
them so memberships can reference them and reports who the caller is.
"""

__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "User records referenced by memberships",
    "dependencies": [],
}
