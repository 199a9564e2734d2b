"""
Database model for categories.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, String

from app.db.session import Base


def utcnow() -> datetime:
    """Naive UTC timestamp with microsecond resolution."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Category(Base):
    """
    A named provider pairing with a main image and an icon.

    Image columns hold web paths (``/uploads/method-icons/<file>``), not
    filesystem locations.
    """

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid4()))
    category_name = Column(String(255), nullable=False, unique=True, index=True)
    provider_id = Column(String(255), nullable=False)
    main_image = Column(String(512), nullable=False)
    icon_image = Column(String(512), nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.category_name!r}>"
