"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orgguard.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    Users are owned by the identity subsystem. ``create`` and ``delete``
    exist for that subsystem and for seeding; the membership core only reads.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID populated
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: str) -> User | None:
        """Get a user by ID.

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def delete(self, user: User) -> None:
        """Delete a user; the database cascades to their memberships."""
        await self.session.delete(user)
        await self.session.flush()
