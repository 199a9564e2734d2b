"""
FastAPI API dependencies.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import Database
from app.services.category_store import CategoryStore
from app.services.image_storage import ImageStorage


def get_database(request: Request) -> Database:
    """
    The database handle the application was built with.
    """
    return request.app.state.database  # type: ignore[no-any-return]


async def get_db_session(database: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting an async database session.
    """
    async with database.session() as session:
        yield session


def get_category_store(db: AsyncSession = Depends(get_db_session)) -> CategoryStore:
    """Category store bound to the request's session."""
    return CategoryStore(db)


def get_image_storage(request: Request) -> ImageStorage:
    """Image storage the application was built with."""
    return request.app.state.image_storage  # type: ignore[no-any-return]
