"""
Category Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from datetime import datetime
from typing import Optional

from catalog.models.category import CategoryType, ImageType


class ImageInput(BaseModel):
    """Image record sent by clients. Asset ids are never accepted from a request."""
    url: str = Field(..., min_length=1)
    alt_text: str = ""
    width: Optional[float] = None
    height: Optional[float] = None
    type: ImageType = ImageType.thumbnail


class ImageSchema(ImageInput):
    """Image record embedded in a category."""
    id: Optional[str] = None  # Media store asset id, set only by uploads


class CategoryCreate(BaseModel):
    """Schema for creating a category or subcategory."""
    name: str = Field(..., min_length=1, max_length=200)
    type: CategoryType = CategoryType.normal
    description: Optional[str] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None
    active: bool = True
    popularity_score: float = 0
    ancestors: list[str] = []
    images: list[ImageInput] = []

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class CategoryUpdate(BaseModel):
    """Schema for updating a category. Only fields that are sent are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[CategoryType] = None
    parent_id: Optional[str] = None
    description: Optional[str] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None
    active: Optional[bool] = None
    popularity_score: Optional[float] = None
    ancestors: Optional[list[str]] = None
    images: Optional[list[ImageInput]] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for field in ("name", "type", "active", "popularity_score", "ancestors", "images"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class UserSummary(BaseModel):
    """Expanded creator/updater reference."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class ParentSummary(BaseModel):
    """Expanded parent reference used in subcategory listings."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    type: CategoryType


class CategoryResponse(BaseModel):
    """Schema for category response. ``children`` is filled by tree expansion."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    type: CategoryType
    parent_id: Optional[str] = None
    ancestors: list[str] = []
    description: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    active: bool
    images: list[ImageSchema] = []
    popularity_score: float
    created_by_id: str
    updated_by_id: Optional[str] = None
    created_by: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime
    children: list["CategoryResponse"] = []


# Enable forward references for recursive model
CategoryResponse.model_rebuild()


class SubCategoryResponse(BaseModel):
    """Flat subcategory listing item with its parent expanded."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    type: CategoryType
    parent_id: Optional[str] = None
    parent: Optional[ParentSummary] = None
    ancestors: list[str] = []
    description: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    active: bool
    images: list[ImageSchema] = []
    popularity_score: float
    created_by_id: str
    updated_by_id: Optional[str] = None
    created_by: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    """Page information returned with subcategory listings."""
    total: int
    page: int
    limit: int
    pages: int
    has_next: bool
    has_prev: bool
