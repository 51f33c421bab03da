"""Caller identity resolution.

Authentication happens upstream; this package only turns the identity
the session provider forwards into a ``User``.
"""

from orgguard.core.auth.dependencies import CurrentUser, get_current_user


__all__ = [
    "CurrentUser",
    "get_current_user",
]
