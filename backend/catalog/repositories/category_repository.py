"""
Persistence for categories.

Wraps a SQLAlchemy session with the document-store style operations the
category service relies on. Write-time rules that belong to the stored model
(slug assignment, name uniqueness, parent reference checks) live here so every
write path gets them.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, Query, joinedload

from catalog.exceptions import ValidationFailure
from catalog.models.category import Category
from catalog.utils.slug import create_slug

logger = logging.getLogger(__name__)


class CategoryRepository:
    """Category persistence bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    # Reads

    def query(self, with_parent: bool = False) -> Query:
        """Base query with the creator reference expanded."""
        options = [joinedload(Category.created_by)]
        if with_parent:
            options.append(joinedload(Category.parent))
        return self.db.query(Category).options(*options)

    def find(self, *criteria, **filters) -> List[Category]:
        return self.query().filter(*criteria).filter_by(**filters).order_by(
            Category.created_at, Category.id
        ).all()

    def find_one(self, **filters) -> Optional[Category]:
        return self.query().filter_by(**filters).first()

    def find_by_id(self, category_id: str) -> Optional[Category]:
        return self.query().filter(Category.id == category_id).first()

    def find_children(self, parent_id: str) -> List[Category]:
        """Direct children of a category, in creation order."""
        return self.find(Category.parent_id == parent_id)

    def count_documents(self, *criteria) -> int:
        return self.db.query(Category).filter(*criteria).count()

    def slug_exists(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        query = self.db.query(Category.id).filter(Category.slug == slug)
        if exclude_id:
            query = query.filter(Category.id != exclude_id)
        return query.first() is not None

    def name_exists(self, name: str, exclude_id: Optional[str] = None) -> bool:
        query = self.db.query(Category.id).filter(Category.name == name)
        if exclude_id:
            query = query.filter(Category.id != exclude_id)
        return query.first() is not None

    # Write hooks

    def unique_slug(self, name: str, exclude_id: Optional[str] = None) -> str:
        """
        First free slug for a name: base, base-1, base-2, ...

        Check-then-write, not atomic. A concurrent insert that claims the same
        slug fails on the unique index instead.
        """
        base = create_slug(name)
        slug = base
        count = 1
        while self.slug_exists(slug, exclude_id):
            slug = f"{base}-{count}"
            count += 1
        return slug

    def _check_name(self, name: str, exclude_id: Optional[str] = None):
        if self.name_exists(name, exclude_id):
            raise ValidationFailure.for_field("name", f"A category named '{name}' already exists")

    def _check_parent(self, parent_id: Optional[str], category_id: Optional[str] = None):
        if parent_id is None:
            return

        if parent_id == category_id:
            raise ValidationFailure.for_field("parent_id", "A category cannot be its own parent")

        parent = self.db.get(Category, parent_id)
        if parent is None:
            raise ValidationFailure.for_field("parent_id", f"No category found with ID {parent_id}")

        if category_id is None:
            return

        # Walk up from the new parent; meeting the category itself means a cycle
        seen = set()
        current = parent
        while current is not None and current.id not in seen:
            if current.parent_id == category_id:
                raise ValidationFailure.for_field(
                    "parent_id", "A category cannot be moved under one of its descendants"
                )
            seen.add(current.id)
            current = self.db.get(Category, current.parent_id) if current.parent_id else None

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Category write rejected by constraint: {e.orig}")
            raise ValidationFailure(
                "Category name or slug already exists",
                [{"field": "name", "message": "must be unique"}]
            ) from e

    # Writes

    def create(self, fields: Dict[str, Any]) -> Category:
        self._check_name(fields["name"])
        self._check_parent(fields.get("parent_id"))

        category = Category(**fields)
        category.slug = self.unique_slug(category.name)

        self.db.add(category)
        self._commit()
        self.db.refresh(category)
        logger.info(f"Created category {category.id} ({category.slug})")
        return category

    def find_by_id_and_update(self, category_id: str, fields: Dict[str, Any]) -> Optional[Category]:
        category = self.find_by_id(category_id)
        if not category:
            return None

        if "name" in fields and fields["name"] != category.name:
            self._check_name(fields["name"], exclude_id=category.id)
            category.slug = self.unique_slug(fields["name"], exclude_id=category.id)
        if "parent_id" in fields and fields["parent_id"] != category.parent_id:
            self._check_parent(fields["parent_id"], category_id=category.id)

        for field, value in fields.items():
            setattr(category, field, value)

        self._commit()
        self.db.refresh(category)
        logger.info(f"Updated category {category.id} ({category.slug})")
        return category

    def find_by_id_and_delete(self, category_id: str) -> None:
        self.db.query(Category).filter(Category.id == category_id).delete(
            synchronize_session="fetch"
        )
        self._commit()
        logger.info(f"Deleted category {category_id}")
