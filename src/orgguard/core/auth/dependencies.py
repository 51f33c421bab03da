"""FastAPI dependencies for caller identity.

The upstream session provider authenticates the request and forwards the
user's ID in a header (``X-User-Id`` by default). The value is trusted as
given; it is only checked against the users table.
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request

from orgguard.api.dependencies import DBSession
from orgguard.config import settings
from orgguard.core.errors import UnauthorizedError
from orgguard.modules.users.models import User
from orgguard.modules.users.repos import UserRepository


async def get_current_user(request: Request, db: DBSession) -> User:
    """Get the user making the request.

    Args:
        request: The incoming request
        db: Database session

    Returns:
        The calling user

    Raises:
        UnauthorizedError: If the identity header is missing or names an
            unknown user
    """
    user_id = request.headers.get(settings.identity_header)
    if not user_id:
        raise UnauthorizedError(
            "Missing caller identity",
            error_code="missing_identity",
        )

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise UnauthorizedError(
            "Unknown user",
            error_code="unknown_user",
        )

    request.state.user_id = user.id
    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
