"""Persistence of category records."""

from typing import List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError, NotFoundError, StorageError
from app.db.models.category import Category
from app.schemas.categories import CategoryFields


class CategoryStore:
    """
    Store for category records.

    The unique index on ``category_name`` is the only duplicate check: a
    violation surfaces as ``DuplicateKeyError`` so concurrent inserts of the
    same name resolve to exactly one winner.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session."""
        self.db = db

    async def list_all(self) -> List[Category]:
        """All categories, newest first."""
        query = select(Category).order_by(Category.created_at.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        query = select(Category).where(Category.id == category_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def insert(self, fields: CategoryFields) -> Category:
        """Persist a new category and return it with its id and timestamps."""
        category = Category(**fields.model_dump(exclude_none=True))
        self.db.add(category)
        await self._commit()
        await self.db.refresh(category)

        logger.info(f"Created category {category.id} ({category.category_name!r})")
        return category

    async def update_by_id(self, category_id: str, fields: CategoryFields) -> Category:
        """Apply the non-``None`` fields to an existing category."""
        category = await self.get_by_id(category_id)
        if not category:
            raise NotFoundError()

        for key, value in fields.model_dump(exclude_none=True).items():
            setattr(category, key, value)

        await self._commit()
        await self.db.refresh(category)

        logger.info(f"Updated category {category.id}")
        return category

    async def delete_by_id(self, category_id: str) -> bool:
        """Remove a category. Returns False when there was nothing to remove."""
        category = await self.get_by_id(category_id)
        if not category:
            return False

        await self.db.delete(category)
        await self._commit()

        logger.info(f"Deleted category {category_id}")
        return True

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Category unique constraint violated: {e.orig}")
            raise DuplicateKeyError() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Category commit failed: {e!r}")
            raise StorageError() from e

