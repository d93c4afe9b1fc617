"""
Subcategory API endpoints.
"""

from fastapi import APIRouter, Depends, Query, Request
from typing import Optional

from catalog.api.payload import read_category_request
from catalog.config import settings
from catalog.dependencies import get_category_service, get_current_user_id
from catalog.schemas.category import CategoryCreate, CategoryUpdate
from catalog.services.category_service import CategoryService
from catalog.services.media_store import MediaStore, get_media_store
from catalog.utils.responses import success_response

router = APIRouter(tags=["subcategories"])


@router.get("/subcategories")
def list_subcategories(
    parent_id: Optional[str] = None,
    sort: Optional[str] = None,
    fields: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    service: CategoryService = Depends(get_category_service)
):
    """List subcategories, optionally under one parent, with sorting and paging."""
    sub_categories, pagination = service.list_subcategories(
        parent_id=parent_id,
        sort=sort,
        fields=fields,
        page=page,
        limit=limit
    )
    return success_response(
        {"sub_categories": sub_categories, "pagination": pagination},
        "Subcategories fetched successfully"
    )


@router.post("/categories/{parent_id}/subcategories", status_code=201)
async def create_subcategory(
    parent_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: CategoryService = Depends(get_category_service),
    media_store: MediaStore = Depends(get_media_store)
):
    """Create a category under an existing parent."""
    payload, uploads, alt_text = await read_category_request(request, CategoryCreate, media_store)
    sub_category = service.create_subcategory(parent_id, payload, user_id, uploads, alt_text)
    return success_response({"sub_category": sub_category}, "Subcategory created successfully", 201)


@router.patch("/subcategories/{subcategory_id}")
async def update_subcategory(
    subcategory_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: CategoryService = Depends(get_category_service),
    media_store: MediaStore = Depends(get_media_store)
):
    """Update a subcategory. Uploaded images replace the existing ones."""
    payload, uploads, alt_text = await read_category_request(request, CategoryUpdate, media_store)
    sub_category = service.update_subcategory(subcategory_id, payload, user_id, uploads, alt_text)
    return success_response({"sub_category": sub_category}, "Subcategory updated successfully")


@router.delete(
    "/subcategories/{subcategory_id}",
    status_code=204,
    dependencies=[Depends(get_current_user_id)]
)
def delete_subcategory(
    subcategory_id: str,
    service: CategoryService = Depends(get_category_service)
):
    """Delete a subcategory and its images."""
    service.delete_subcategory(subcategory_id)
    return success_response(None, "Subcategory deleted successfully", 204)
