"""Error handling module with RFC 7807 Problem Details."""

from orgguard.core.errors.exceptions import (
    AppException,
    ConflictError,
    ForbiddenError,
    LastAdminError,
    MembershipNotFoundError,
    NotAMemberError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from orgguard.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    problem_response,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "ConflictError",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "LastAdminError",
    "MembershipNotFoundError",
    "NotAMemberError",
    "NotFoundError",
    "ProblemDetail",
    "UnauthorizedError",
    "ValidationError",
    "problem_response",
    "register_exception_handlers",
]
