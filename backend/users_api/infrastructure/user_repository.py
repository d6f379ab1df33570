"""SQL User Repository — the data adapter behind the user handlers.

Invariants:
    - Exactly one parameterized statement per operation, committed immediately
    - No rows / zero rows affected → UserNotFoundError
    - Any other engine failure propagates unmodified (SQLAlchemyError)
    - No batching, no retries, no multi-statement transactions

Design Decisions:
    - update/delete use bulk statements with synchronize_session=False: the session
      holds no identity map state worth synchronizing, and rowcount is read directly
    - rowcount counts matched rows (asyncpg, aiosqlite, and SQLAlchemy's MySQL
      dialects all report it that way), so re-applying identical values still
      counts as one affected row
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.core.domain_types import UserId
from users_api.core.errors import UserNotFoundError
from users_api.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """UserRepository implementation over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create(self, name: str, email: str) -> UserId:
        user = User(name=name, email=email)
        self._db.add(user)
        await self._db.commit()
        logger.debug("User inserted", extra={"user_id": user.id})
        return UserId(user.id)

    async def get(self, user_id: UserId) -> User:
        result = await self._db.execute(
            select(User).where(User.id == user_id),
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update(self, user_id: UserId, name: str, email: str) -> None:
        result = await self._db.execute(
            update(User)
            .where(User.id == user_id)
            .values(name=name, email=email)
            .execution_options(synchronize_session=False),
        )
        await self._db.commit()
        if result.rowcount == 0:
            raise UserNotFoundError(user_id)

    async def delete(self, user_id: UserId) -> None:
        result = await self._db.execute(
            delete(User)
            .where(User.id == user_id)
            .execution_options(synchronize_session=False),
        )
        await self._db.commit()
        if result.rowcount == 0:
            raise UserNotFoundError(user_id)
