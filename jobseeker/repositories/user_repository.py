"""
User Repository Implementation
"""

from typing import Optional, Type
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from jobseeker.core.exceptions import JobStoreError, UserNotFoundError
from jobseeker.models.user import User
from jobseeker.repositories.base_repository import BaseRepository
from jobseeker.utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user lookups and registration."""

    @property
    def model(self) -> Type[User]:
        return User

    async def get_by_email(self, email: str) -> User:
        """
        Get a user by email.

        Raises:
            UserNotFoundError: If no user has this email
        """
        async with self.get_session() as session:
            try:
                result = await session.execute(select(User).where(User.email == email))
                user = result.scalar_one_or_none()
            except SQLAlchemyError as e:
                raise JobStoreError(f"Error getting user {email}: {e}") from e

        if user is None:
            raise UserNotFoundError(email)
        return user

    async def get_or_create(
        self,
        email: str,
        name: Optional[str] = None,
        location: Optional[str] = None,
    ) -> User:
        """Get a user by email, creating it if missing."""
        if not email:
            raise ValueError("email is required")

        try:
            return await self.get_by_email(email)
        except UserNotFoundError:
            pass

        async with self.get_session() as session:
            user = User(email=email, name=name, location=location)
            try:
                session.add(user)
                await session.commit()
                await session.refresh(user)
            except SQLAlchemyError as e:
                await session.rollback()
                raise JobStoreError(f"Error creating user {email}: {e}") from e

        logger.info("Created new user", email=email, name=name)
        return user
