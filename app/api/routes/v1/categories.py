"""
Category endpoints.

Each write keeps the database row and its two image files in step without
a transaction:

* create saves both files, then inserts; the files are removed again if
  the insert fails.
* update saves replacement files, updates the row, then deletes every
  superseded file. Failing to delete any of them is a 500.
* delete removes the row first, then the files best-effort.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from app.api.dependencies import get_category_store, get_image_storage
from app.api.responses import (
    HTTP_201_CREATED,
    CategoryEnvelope,
    CategoryListEnvelope,
    MessageEnvelope,
    Tags,
    category_error_responses,
)
from app.core.exceptions import (
    CategoryServiceError,
    CategoryValidationError,
    NotFoundError,
    StorageError,
)
from app.core.metrics import track_category_operation
from app.schemas.categories import CategoryFields, CategoryResponse
from app.services.category_store import CategoryStore
from app.services.image_storage import ImageStorage

router = APIRouter(tags=[Tags.CATEGORIES], responses=category_error_responses)


@router.get("/", response_model=CategoryListEnvelope, response_model_exclude_none=True)
async def list_categories(store: CategoryStore = Depends(get_category_store)) -> Any:
    """List every category, newest first."""
    with track_category_operation("list"):
        try:
            categories = await store.list_all()
        except SQLAlchemyError as e:
            raise _storage_failure(e) from e

    return CategoryListEnvelope(success=True, data=[CategoryResponse.model_validate(c) for c in categories])


@router.get("/{category_id}", response_model=CategoryEnvelope, response_model_exclude_none=True)
async def get_category(category_id: str, store: CategoryStore = Depends(get_category_store)) -> Any:
    """Fetch a single category."""
    with track_category_operation("get"):
        try:
            category = await store.get_by_id(category_id)
        except SQLAlchemyError as e:
            raise _storage_failure(e) from e

        if not category:
            raise NotFoundError()

    return CategoryEnvelope(success=True, data=CategoryResponse.model_validate(category))


@router.post(
    "/add",
    response_model=CategoryEnvelope,
    response_model_exclude_none=True,
    status_code=HTTP_201_CREATED,
)
async def create_category(
    category_name: Optional[str] = Form(None, alias="categoryName"),
    provider_id: Optional[str] = Form(None, alias="providerId"),
    main_image: Optional[UploadFile] = File(None, alias="mainImage"),
    icon_image: Optional[UploadFile] = File(None, alias="iconImage"),
    store: CategoryStore = Depends(get_category_store),
    images: ImageStorage = Depends(get_image_storage),
) -> Any:
    """Create a category from a name, a provider id and two images."""
    with track_category_operation("create"):
        if not _has_file(main_image) or not _has_file(icon_image):
            raise CategoryValidationError("Both images required")

        name = _clean_name(category_name)
        if not name:
            raise CategoryValidationError("Category name required")
        if not _has_text(provider_id):
            raise CategoryValidationError("Provider ID required")

        saved: List[str] = []
        try:
            saved.append(images.save(main_image))  # type: ignore[arg-type]
            saved.append(images.save(icon_image))  # type: ignore[arg-type]
            category = await store.insert(
                CategoryFields(
                    category_name=name,
                    provider_id=provider_id,
                    main_image=saved[0],
                    icon_image=saved[1],
                )
            )
        except CategoryServiceError:
            _discard_all(images, saved)
            raise
        except (SQLAlchemyError, OSError) as e:
            _discard_all(images, saved)
            raise _storage_failure(e) from e

    return CategoryEnvelope(success=True, data=CategoryResponse.model_validate(category))


@router.put("/{category_id}", response_model=CategoryEnvelope, response_model_exclude_none=True)
async def update_category(
    category_id: str,
    category_name: Optional[str] = Form(None, alias="categoryName"),
    provider_id: Optional[str] = Form(None, alias="providerId"),
    main_image: Optional[UploadFile] = File(None, alias="mainImage"),
    icon_image: Optional[UploadFile] = File(None, alias="iconImage"),
    store: CategoryStore = Depends(get_category_store),
    images: ImageStorage = Depends(get_image_storage),
) -> Any:
    """Update name/provider and replace either image independently."""
    with track_category_operation("update"):
        try:
            category = await store.get_by_id(category_id)
        except SQLAlchemyError as e:
            raise _storage_failure(e) from e

        if not category:
            raise NotFoundError()

        fields = CategoryFields(
            category_name=_clean_name(category_name),
            provider_id=provider_id if _has_text(provider_id) else None,
        )

        saved: List[str] = []
        superseded: List[str] = []
        try:
            if _has_file(main_image):
                fields.main_image = images.save(main_image)  # type: ignore[arg-type]
                saved.append(fields.main_image)
                superseded.append(str(category.main_image))
            if _has_file(icon_image):
                fields.icon_image = images.save(icon_image)  # type: ignore[arg-type]
                saved.append(fields.icon_image)
                superseded.append(str(category.icon_image))

            category = await store.update_by_id(category_id, fields)
        except CategoryServiceError:
            _discard_all(images, saved)
            raise
        except (SQLAlchemyError, OSError) as e:
            _discard_all(images, saved)
            raise _storage_failure(e) from e

        failed = _delete_all(images, superseded)
        if failed:
            raise StorageError("Could not remove replaced image")

    return CategoryEnvelope(success=True, data=CategoryResponse.model_validate(category))


@router.delete("/{category_id}", response_model=MessageEnvelope)
async def delete_category(
    category_id: str,
    store: CategoryStore = Depends(get_category_store),
    images: ImageStorage = Depends(get_image_storage),
) -> Any:
    """Delete a category and its images. Unknown ids are a no-op."""
    with track_category_operation("delete"):
        try:
            category = await store.get_by_id(category_id)
            if category:
                paths = [category.main_image, category.icon_image]
                await store.delete_by_id(category_id)
                for path in paths:
                    images.discard(path)
            else:
                logger.info(f"Category {category_id} already absent")
        except SQLAlchemyError as e:
            raise _storage_failure(e) from e

    return MessageEnvelope(success=True, message="Deleted")


def _has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


def _has_text(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def _clean_name(value: Optional[str]) -> Optional[str]:
    """Trim a category name; blank names count as absent."""
    if value is None:
        return None
    return value.strip() or None


def _discard_all(images: ImageStorage, paths: List[str]) -> None:
    for path in paths:
        images.discard(path)


def _delete_all(images: ImageStorage, paths: List[str]) -> List[str]:
    """Delete each path, returning the ones that could not be removed."""
    failed = []
    for path in paths:
        try:
            images.delete(path)
        except (OSError, StorageError) as e:
            logger.error(f"Could not remove replaced image {path}: {e}")
            failed.append(path)
    return failed


def _storage_failure(error: Exception) -> StorageError:
    """Log the underlying error and hide its details from the client."""
    logger.error(f"Category storage failure: {error!r}")
    return StorageError()
