"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends, Request
from typing import Optional

from catalog.api.payload import read_category_request
from catalog.dependencies import get_category_service, get_current_user_id
from catalog.models.category import CategoryType
from catalog.schemas.category import CategoryCreate, CategoryUpdate
from catalog.services.category_service import CategoryService
from catalog.services.media_store import MediaStore, get_media_store
from catalog.utils.responses import success_response

router = APIRouter()


@router.get("")
def list_categories(
    type: Optional[CategoryType] = None,
    service: CategoryService = Depends(get_category_service)
):
    """List top-level categories with all nested children."""
    categories = service.list_categories(type)
    return success_response(
        {"categories": categories},
        "Categories fetched successfully with nested children"
    )


@router.get("/{slug}")
def get_category(
    slug: str,
    service: CategoryService = Depends(get_category_service)
):
    """Get a category by slug with all nested children."""
    category = service.get_category(slug)
    return success_response(
        {"category": category},
        "Category fetched successfully with nested children"
    )


@router.post("", status_code=201)
async def create_category(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: CategoryService = Depends(get_category_service),
    media_store: MediaStore = Depends(get_media_store)
):
    """Create a top-level category."""
    payload, uploads, alt_text = await read_category_request(request, CategoryCreate, media_store)
    category = service.create_category(payload, user_id, uploads, alt_text)
    return success_response({"category": category}, "Category created successfully", 201)


@router.patch("/{category_id}")
async def update_category(
    category_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: CategoryService = Depends(get_category_service),
    media_store: MediaStore = Depends(get_media_store)
):
    """Update a category. Uploaded images replace the existing ones."""
    payload, uploads, alt_text = await read_category_request(request, CategoryUpdate, media_store)
    category = service.update_category(category_id, payload, user_id, uploads, alt_text)
    return success_response({"category": category}, "Category updated successfully")


@router.delete("/{category_id}", status_code=204, dependencies=[Depends(get_current_user_id)])
def delete_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service)
):
    """Delete a category and its images. Children are not deleted."""
    service.delete_category(category_id)
    return success_response(None, "Category deleted successfully", 204)
