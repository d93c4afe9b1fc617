"""
Main API router.
"""

from fastapi import APIRouter
from catalog.api import categories, subcategories

api_router = APIRouter()

api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(subcategories.router)
