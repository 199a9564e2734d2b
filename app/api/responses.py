"""
Standardized API response envelopes.

Every endpoint answers with ``{success, data}`` or ``{success, message}``.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from fastapi import status
from pydantic import BaseModel, Field

from app.schemas.categories import CategoryResponse

# Type variable for generic response models
T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Generic response envelope."""

    success: bool = Field(..., description="Whether the operation succeeded")
    data: Optional[T] = Field(None, description="Response payload")
    message: Optional[str] = Field(None, description="Human readable outcome")


class MessageEnvelope(BaseModel):
    """Envelope carrying only an outcome message."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human readable outcome")


class ErrorEnvelope(BaseModel):
    """Envelope returned by every failed request."""

    success: bool = Field(False, description="Always false")
    message: str = Field(..., description="What went wrong")


CategoryEnvelope = Envelope[CategoryResponse]
CategoryListEnvelope = Envelope[List[CategoryResponse]]


def error_body(message: str) -> Dict[str, Any]:
    """Build the JSON body of a failed request."""
    return ErrorEnvelope(message=message).model_dump()


# Export HTTP status codes for easier route definitions
HTTP_200_OK = status.HTTP_200_OK
HTTP_201_CREATED = status.HTTP_201_CREATED
HTTP_400_BAD_REQUEST = status.HTTP_400_BAD_REQUEST
HTTP_404_NOT_FOUND = status.HTTP_404_NOT_FOUND
HTTP_500_INTERNAL_SERVER_ERROR = status.HTTP_500_INTERNAL_SERVER_ERROR


# Define tags for route categorization
class Tags:
    """API route tags for documentation grouping."""

    HEALTH = "Health"
    CATEGORIES = "Categories"


category_error_responses: dict[int | str, dict[str, Any]] | None = {
    HTTP_400_BAD_REQUEST: {
        "model": ErrorEnvelope,
        "description": "Bad Request – Missing images or fields, or duplicate name",
    },
    HTTP_404_NOT_FOUND: {
        "model": ErrorEnvelope,
        "description": "Not Found – No category with this id",
    },
    HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": ErrorEnvelope,
        "description": "Internal Error – Database or filesystem failure",
    },
}
