"""User repository: the credential store."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.exceptions import DuplicateIdentityError
from fintrack.models.user import User
from fintrack.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model with authentication queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_id(self, id: UUID) -> User | None:
        """Get a user by ID, refreshing owned-record collections already in the session."""
        result = await self.db.execute(
            select(User).where(User.id == id).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email address (used for login)."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if email is already registered."""
        result = await self.db.execute(select(User.id).where(User.email == email))
        return result.scalar_one_or_none() is not None

    async def create(self, user: User) -> User:
        """Persist a new user.

        Raises:
            DuplicateIdentityError: If the email is already registered
        """
        try:
            return await super().create(user)
        except IntegrityError as exc:
            await self.db.rollback()
            message = str(exc.orig).lower()
            if "unique" in message or "duplicate" in message:
                raise DuplicateIdentityError() from exc
            raise
