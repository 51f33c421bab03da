"""Unit tests for domain exceptions."""

import pytest

from orgguard.core.errors import (
    AppException,
    ConflictError,
    ForbiddenError,
    LastAdminError,
    MembershipNotFoundError,
    NotAMemberError,
    NotFoundError,
    UnauthorizedError,
)


pytestmark = pytest.mark.unit


class TestAuthorizationErrors:
    """The three 403 kinds share a base but keep distinct codes and messages."""

    def test_not_a_member(self):
        exc = NotAMemberError()
        assert isinstance(exc, ForbiddenError)
        assert exc.status_code == 403
        assert exc.error_code == "not_a_member"
        assert exc.message == "You are not a member of this organization"

    def test_permission_denied(self):
        exc = ForbiddenError()
        assert exc.status_code == 403
        assert exc.error_code == "permission_denied"
        assert exc.message == "You don't have permission to perform this action"

    def test_last_admin(self):
        exc = LastAdminError()
        assert isinstance(exc, ForbiddenError)
        assert exc.error_code == "last_admin"
        assert exc.message == "Cannot remove the last admin from an organization"

    def test_message_is_the_exception_text(self):
        assert str(NotAMemberError()) == "You are not a member of this organization"


class TestNotFoundErrors:
    """Tests for NotFoundError and MembershipNotFoundError."""

    def test_membership_not_found(self):
        exc = MembershipNotFoundError(resource="membership", resource_id="u1:o1")
        assert isinstance(exc, NotFoundError)
        assert exc.status_code == 404
        assert exc.error_code == "membership_not_found"
        assert exc.message == "User is not a member of this organization"
        assert exc.details == {"resource": "membership", "resource_id": "u1:o1"}

    def test_details_are_merged(self):
        exc = NotFoundError("User not found", resource="user", details={"hint": "x"})
        assert exc.details == {"hint": "x", "resource": "user"}


class TestOtherErrors:
    """Tests for the remaining error kinds."""

    def test_conflict_keeps_custom_code(self):
        exc = ConflictError("taken", error_code="slug_exists", details={"slug": "acme"})
        assert exc.status_code == 409
        assert exc.error_code == "slug_exists"
        assert exc.details == {"slug": "acme"}

    def test_unauthorized(self):
        exc = UnauthorizedError(error_code="missing_identity")
        assert exc.status_code == 401
        assert exc.error_code == "missing_identity"

    def test_defaults(self):
        exc = AppException()
        assert exc.status_code == 500
        assert exc.error_code == "internal_error"
        assert exc.details == {}
