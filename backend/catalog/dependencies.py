"""
FastAPI dependencies.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from catalog.database import get_db
from catalog.repositories.category_repository import CategoryRepository
from catalog.services.category_service import CategoryService
from catalog.services.media_store import MediaStore, get_media_store


def get_category_service(
    db: Session = Depends(get_db),
    media_store: MediaStore = Depends(get_media_store)
) -> CategoryService:
    """
    Dependency for a request-scoped category service.
    """
    return CategoryService(CategoryRepository(db), media_store)


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """
    Identity of the acting user, as set by the upstream auth layer.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id
