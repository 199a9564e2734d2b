"""
Pydantic schemas for the categories resource.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CategoryFields(BaseModel):
    """
    Column values handed to the category store.

    Used for both inserts and partial updates; ``None`` means "leave as is".
    """

    category_name: Optional[str] = None
    provider_id: Optional[str] = None
    main_image: Optional[str] = None
    icon_image: Optional[str] = None


class CategoryResponse(BaseModel):
    """
    Schema for category response.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str = Field(..., description="Category ID")
    category_name: str = Field(..., description="Unique display name")
    provider_id: str = Field(..., description="External provider identifier")
    main_image: str = Field(..., description="Web path of the main image")
    icon_image: str = Field(..., description="Web path of the icon image")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
