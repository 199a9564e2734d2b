"""
Application lifecycle event handlers.

These functions are executed during application startup and shutdown.
"""

from fastapi import FastAPI
from loguru import logger

from app.db.session import Database
from app.services.image_storage import ImageStorage


async def open_resources(app: FastAPI) -> None:
    """
    Connect the database and prepare the upload directory.

    Fails application startup if either is unavailable.
    """
    database: Database = app.state.database
    images: ImageStorage = app.state.image_storage

    try:
        logger.info("Connecting to database...")
        await database.connect()
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise

    images.ensure_directory()
    logger.info(f"Category images stored in {images.directory}")


async def close_resources(app: FastAPI) -> None:
    """
    Release database connections.
    """
    database: Database = app.state.database
    try:
        logger.info("Closing database connections...")
        await database.disconnect()
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")
