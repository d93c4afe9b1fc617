"""
Pydantic schemas package.
"""

from catalog.schemas.category import (
    ImageInput,
    ImageSchema,
    CategoryCreate,
    CategoryUpdate,
    UserSummary,
    ParentSummary,
    CategoryResponse,
    SubCategoryResponse,
    Pagination,
)

__all__ = [
    "ImageInput",
    "ImageSchema",
    "CategoryCreate",
    "CategoryUpdate",
    "UserSummary",
    "ParentSummary",
    "CategoryResponse",
    "SubCategoryResponse",
    "Pagination",
]
