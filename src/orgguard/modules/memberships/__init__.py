"""Memberships: who belongs to which organization, with which role."""

__module_info__ = {
    "name": "memberships",
    "version": "1.0.0",
    "description": "Member listing and last-admin-protected role changes",
    "dependencies": ["users", "organizations"],
}
