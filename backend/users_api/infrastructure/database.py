"""Database Session Manager — one connection per request, released on every exit path.

Invariants:
    - A session's connection is acquired before the handler body runs
      (connection failure → StorageError "DB connect error: ...")
    - Every session rolls back on exception and is closed in finally
    - SQLAlchemy exceptions that escape a handler are mapped to StorageError

Design Decisions:
    - Singleton db_manager initialized on startup by the FastAPI lifespan
    - null_pool=True disables pooling: a fresh connection is opened per request
      and closed when the request ends
    - expire_on_commit=False: returned ORM objects stay readable after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import NullPool

from users_api.core.errors import StorageError
from users_api.db.base import Base

logger = logging.getLogger(__name__)


def describe_db_error(exc: BaseException) -> str:
    """Driver-level message without SQLAlchemy's statement/background suffix."""
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


class DatabaseSessionManager:
    """Manages async database sessions with per-request connection acquisition."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 5,
        max_overflow: int = 5,
        null_pool: bool = False,
    ):
        if null_pool:
            self.engine = create_async_engine(database_url, poolclass=NullPool)
        else:
            self.engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def _connect(self) -> AsyncSession:
        """Open a session and force its connection, like a connect + ping."""
        session = self._session_factory()
        try:
            await session.connection()
        except (SQLAlchemyError, OSError) as e:
            await session.close()
            logger.error(f"DB connect error: {e}")
            raise StorageError(f"DB connect error: {describe_db_error(e)}", "connect")
        return session

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a connected session with auto-rollback on exception."""
        session = await self._connect()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise StorageError(describe_db_error(e), "commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise StorageError(describe_db_error(e), "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise StorageError(describe_db_error(e), "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StorageError(describe_db_error(e), "unknown")
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create missing tables from ORM metadata (no migrations)."""
        import users_api.models  # noqa: F401  registers every model on Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for the readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except StorageError as e:
            logger.error(f"DB health check failed: {e.message}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager | None:
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
