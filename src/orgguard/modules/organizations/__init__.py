"""Organizations: creation, settings and the caller's role in each."""

__module_info__ = {
    "name": "organizations",
    "version": "1.0.0",
    "description": "Organization lifecycle and per-caller role lookups",
    "dependencies": ["users", "memberships"],
}
