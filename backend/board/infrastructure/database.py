"""Post Storage Engine — async engine and sessions backing the posts table.

Invariants:
    - A failed post write rolls its session back; a half-created or half-deleted post
      is never committed
    - Driver failures surface as DatabaseError (503), never as the generic 400 page,
      so a storage outage is not mistaken for a rejected form
    - The posts table is created on startup unless DATABASE_CREATE_TABLES is off
      (alembic then owns the schema)

Design Decisions:
    - One db_manager per process, built in the app lifespan and read by get_db and
      the readiness route at call time
    - expire_on_commit=False: a created Post keeps its id and timestamps after commit
      for the redirect and the creation log line
    - SQLite URLs skip pool sizing (aiosqlite, used by the test suite)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from board.core.errors import DatabaseError
from board.db.base import Base

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine and hands out sessions for post reads and writes."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; roll back and raise DatabaseError on any SQLAlchemy failure."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"Post storage integrity error: {e}")
            raise DatabaseError("Post violates a table constraint", "commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"Post storage unreachable: {e}")
            raise DatabaseError("Post storage unreachable", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"Post storage driver error: {e}")
            raise DatabaseError("Post storage driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Post storage failure: {e}")
            raise DatabaseError("Post storage operation failed", "unknown")
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create the posts table if it does not exist yet."""
        import board.models  # noqa: F401
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """True if the post storage answers a trivial query."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Post storage readiness check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Built by the app lifespan (init_db)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Session dependency for the post repository."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
