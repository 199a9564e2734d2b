"""
Filesystem storage for category images.

Records hold web paths such as ``/uploads/method-icons/<file>``. Only the
base name of such a path is ever used to locate a file, and the result
must stay inside the upload directory.
"""

import re
import shutil
import time
import uuid
from pathlib import Path, PurePosixPath
from typing import Optional

from fastapi import UploadFile
from loguru import logger

from app.core.config import settings
from app.core.exceptions import StorageError
from app.core.metrics import record_image_file

SAFE_SUFFIX = re.compile(r"\.[a-z0-9]{1,15}")


class ImageStorage:
    """Saves uploads into one directory and removes them again by web path."""

    def __init__(self, directory: Optional[Path] = None, url_prefix: Optional[str] = None) -> None:
        self.directory = Path(directory or settings.category_image_path)
        self.url_prefix = (url_prefix or settings.category_image_url).rstrip("/")

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def web_path(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def resolve(self, web_path: str) -> Path:
        """
        Map a stored web path to its file inside the upload directory.

        Raises:
            StorageError: if the path has no usable base name or would
                resolve outside the upload directory
        """
        name = PurePosixPath(web_path.replace("\\", "/")).name
        if name in ("", ".", ".."):
            raise StorageError(f"Invalid image path: {web_path!r}")

        root = self.directory.resolve()
        path = (root / name).resolve()
        if path.parent != root:
            raise StorageError(f"Image path escapes upload directory: {web_path!r}")
        return path

    def save(self, upload: UploadFile) -> str:
        """
        Write an uploaded file under a fresh unique name.

        Returns:
            The web path to persist on the category
        """
        suffix = PurePosixPath(upload.filename or "").suffix.lower()
        if not SAFE_SUFFIX.fullmatch(suffix):
            suffix = ""
        filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{suffix}"

        self.ensure_directory()
        upload.file.seek(0)
        with open(self.directory / filename, "wb") as f:
            shutil.copyfileobj(upload.file, f)

        record_image_file("saved")
        logger.info(f"Stored image {filename} ({upload.filename})")
        return self.web_path(filename)

    def delete(self, web_path: str) -> None:
        """
        Remove the file behind a web path.

        Raises:
            FileNotFoundError: if the file is already gone
            OSError: on any other filesystem failure
            StorageError: if the path is not inside the upload directory
        """
        self.resolve(web_path).unlink()
        record_image_file("deleted")
        logger.info(f"Removed image {web_path}")

    def discard(self, web_path: Optional[str]) -> None:
        """Best-effort delete: failures are logged, never raised."""
        if not web_path:
            return
        try:
            self.delete(web_path)
        except (OSError, StorageError) as e:
            record_image_file("discard_failed")
            logger.warning(f"Could not remove image {web_path}: {e}")
