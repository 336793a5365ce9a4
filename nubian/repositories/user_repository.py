"""Repository for user lookups."""

from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from nubian.models.user import User
from nubian.utils.logger import get_logger

log = get_logger(__name__)


class UserRepository:
    """Read access to researcher accounts.

    Accounts are written by the session provider; this service only reads them.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, ignoring case and surrounding whitespace."""
        normalized = email.strip().lower()
        log.debug("query user by email", email=normalized)
        # users.email is unique by exact value only, so several rows can match.
        result = await self.session.execute(
            select(User)
            .where(func.lower(User.email) == normalized)
            .order_by(User.created_at, User.id)
            .limit(1)
        )
        user = result.scalars().first()
        log.debug("query result", found=user is not None)
        return user
