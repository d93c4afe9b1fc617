"""
Database models package.
"""

from catalog.models.category import Category, CategoryType, ImageType
from catalog.models.user import User

__all__ = [
    "Category",
    "CategoryType",
    "ImageType",
    "User",
]
