"""
Database session configuration.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings

# Base class for all models
Base = declarative_base()


class Database:
    """
    Handle on the category store.

    Owns the async engine and the session factory. It is created once,
    handed to the application at construction, opened on startup and
    disposed on shutdown.
    """

    def __init__(self, url: Optional[str] = None, echo: bool = False) -> None:
        self.url = url or str(settings.DATABASE_URI)

        engine_kwargs: Dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        # SQLite pools do not take size arguments
        if not make_url(self.url).get_backend_name().startswith("sqlite"):
            engine_kwargs.update(pool_size=10, max_overflow=20)

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autoflush=False,
            autocommit=False,
            class_=AsyncSession,
        )

    async def connect(self) -> None:
        """
        Create missing tables and verify the connection.
        """
        # Import models so their tables are registered on Base.metadata
        from app.db import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with self.session_factory() as session:
            await session.execute(text("SELECT 1"))

        logger.info(f"Database ready ({self.engine.url.get_backend_name()})")

    async def disconnect(self) -> None:
        """
        Dispose of every pooled connection.
        """
        await self.engine.dispose()
        logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session that is rolled back if the caller fails.
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
