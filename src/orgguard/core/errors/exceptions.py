"""Domain errors raised by services and the authorization gate.

Each class fixes an HTTP status and a machine-readable ``error_code``; the
handlers in ``orgguard.core.errors.handlers`` turn them into Problem
Details responses. Nothing here imports the web framework.

Three kinds of refusal share status 403 and must stay distinguishable:

- ``NotAMemberError``: the caller has no membership in the organization
- ``ForbiddenError``: the caller's role lacks the required permission
- ``LastAdminError``: the change would leave the organization without an ADMIN
"""

from typing import Any

from orgguard.core.constants import (
    LAST_ADMIN_MESSAGE,
    MEMBERSHIP_NOT_FOUND_MESSAGE,
    NOT_A_MEMBER_MESSAGE,
    PERMISSION_DENIED_MESSAGE,
)


class AppException(Exception):
    """Base class of every error the API reports to clients.

    Attributes:
        message: Text shown to the caller, verbatim
        error_code: Stable identifier clients can branch on
        status_code: HTTP status of the response
        details: Extra fields added to the response body
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or type(self).message
        self.error_code = error_code or type(self).error_code
        self.details = dict(details or {})
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error_code={self.error_code!r}, message={self.message!r})"


class UnauthorizedError(AppException):
    """The request carries no identity, or one that matches no user."""

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """The caller is a member, but their role lacks the permission."""

    message = PERMISSION_DENIED_MESSAGE
    error_code = "permission_denied"
    status_code = 403


class NotAMemberError(ForbiddenError):
    """The caller has no membership in the organization they act on."""

    message = NOT_A_MEMBER_MESSAGE
    error_code = "not_a_member"


class LastAdminError(ForbiddenError):
    """Demoting or removing the target would leave no ADMIN."""

    message = LAST_ADMIN_MESSAGE
    error_code = "last_admin"


class NotFoundError(AppException):
    """A referenced user, organization or membership does not exist.

    ``resource`` and ``resource_id`` are reported alongside the message.
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = dict(kwargs.pop("details", None) or {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class MembershipNotFoundError(NotFoundError):
    """The user acted upon, or asking for their own role, is not a member."""

    message = MEMBERSHIP_NOT_FOUND_MESSAGE
    error_code = "membership_not_found"


class ConflictError(AppException):
    """A unique slug or a (user, organization) pair is already taken."""

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class ValidationError(AppException):
    """Input that passed schema validation but cannot be used.

    For example an organization name from which no slug can be derived.
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422
