"""Core services and cross-cutting concerns."""

from orgguard.core.database import Base, get_db
from orgguard.core.errors import (
    AppException,
    ConflictError,
    ForbiddenError,
    LastAdminError,
    MembershipNotFoundError,
    NotAMemberError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    register_exception_handlers,
)


__all__ = [
    # Errors
    "AppException",
    # Database
    "Base",
    "ConflictError",
    "ForbiddenError",
    "LastAdminError",
    "MembershipNotFoundError",
    "NotAMemberError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "get_db",
    "register_exception_handlers",
]
