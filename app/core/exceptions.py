"""
Domain exceptions for the categories service.

Every exception carries the HTTP status it maps to; the handlers in
app.api.errors turn them into the ``{success: false, message}`` envelope.
"""

from fastapi import status


class CategoryServiceError(Exception):
    """Base class for errors raised by the categories service."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class CategoryValidationError(CategoryServiceError):
    """A required form field or file is missing."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateKeyError(CategoryServiceError):
    """The category name is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Category name already exists"


class NotFoundError(CategoryServiceError):
    """No category exists with the requested id."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StorageError(CategoryServiceError):
    """The database or the upload directory failed unexpectedly."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage failure"
