"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Slug generation
MAX_SLUG_LENGTH = 63

# String field lengths
MAX_ID_LENGTH = 255
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255

# Error messages surfaced verbatim to callers
NOT_A_MEMBER_MESSAGE = "You are not a member of this organization"
PERMISSION_DENIED_MESSAGE = "You don't have permission to perform this action"
LAST_ADMIN_MESSAGE = "Cannot remove the last admin from an organization"
MEMBERSHIP_NOT_FOUND_MESSAGE = "User is not a member of this organization"
SLUG_EXISTS_MESSAGE = "Organization with this slug already exists"
MEMBERSHIP_EXISTS_MESSAGE = "User is already a member of this organization"
