import os

os.environ.setdefault("DATABASE_URI", "sqlite+aiosqlite://")
os.environ["ENABLE_TRACING"] = "false"
os.environ["JSON_LOGS"] = "false"

from typing import AsyncGenerator, Dict, Tuple  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.db.session import Database  # noqa: E402
from app.main import create_application  # noqa: E402
from app.services.image_storage import ImageStorage  # noqa: E402

ImagePart = Tuple[str, bytes, str]


@pytest_asyncio.fixture(scope="function")
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'categories.db'}")
    await db.connect()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture(scope="function")
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


@pytest.fixture(scope="function")
def image_storage(tmp_path) -> ImageStorage:
    storage = ImageStorage(directory=tmp_path / "uploads" / "method-icons", url_prefix="/uploads/method-icons")
    storage.ensure_directory()
    return storage


@pytest_asyncio.fixture(scope="function")
async def client(database: Database, image_storage: ImageStorage) -> AsyncGenerator[AsyncClient, None]:
    application = create_application(database=database, image_storage=image_storage)
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def image_files() -> Dict[str, ImagePart]:
    return {
        "mainImage": ("logo.png", b"main-image-bytes", "image/png"),
        "iconImage": ("icon.png", b"icon-image-bytes", "image/png"),
    }
