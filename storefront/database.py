# storefront/database.py
import logging
from typing import AsyncGenerator, Optional, Union

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

# Base declarative
Base = declarative_base()


class Database:
    """Owns the engine (connection pool) and the session factory.

    One instance is built per process and handed to the app; requests borrow
    sessions from it through :func:`get_session`.
    """

    def __init__(self, url: Union[str, URL], **engine_options):
        self.engine: AsyncEngine = create_async_engine(url, future=True, **engine_options)
        self.session_maker = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    async def connect(self, create_tables: bool = True) -> None:
        """Check the store is reachable and create missing tables."""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if create_tables:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Connected to the database at %s", self._safe_url())

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")

    def _safe_url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)


def get_database(request: Request) -> Database:
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not configured on the application")
    return database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with get_database(request).session_maker() as session:
        yield session
