"""Service for category tree reads and category/subcategory writes."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from pydantic import ValidationError

from catalog.exceptions import CategoryCycleError, NotFoundError, ValidationFailure
from catalog.models.category import Category, CategoryType
from catalog.repositories.category_repository import CategoryRepository
from catalog.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    ImageSchema,
    Pagination,
    SubCategoryResponse,
)
from catalog.services.media_store import MediaStore, StoredMedia
from catalog.utils.query_features import QueryFeatures

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Category operations over an injected repository and media store.

    Every operation is a straight sequence of steps; the first failure
    propagates and nothing already done is rolled back. In particular media
    deletions are issued one at a time, before the database write they
    precede.
    """

    def __init__(self, repository: CategoryRepository, media_store: MediaStore):
        self.repository = repository
        self.media_store = media_store

    # Tree reads

    def expand_tree(self, category: Category, visited: Optional[Set[str]] = None) -> CategoryResponse:
        """
        Expand a category's children to full depth.

        One children query per node. ``visited`` holds every id seen in this
        expansion; meeting one again means the parent links form a cycle.
        """
        if visited is None:
            visited = set()
        if category.id in visited:
            logger.error(f"Category cycle detected at {category.id}")
            raise CategoryCycleError(category.id)
        visited.add(category.id)

        node = CategoryResponse.model_validate(category)
        node.children = [
            self.expand_tree(child, visited)
            for child in self.repository.find_children(category.id)
        ]
        return node

    def list_categories(self, category_type: Optional[CategoryType] = None) -> List[CategoryResponse]:
        """All top-level categories, each with its full subtree."""
        criteria = [Category.parent_id.is_(None)]
        if category_type:
            criteria.append(Category.type == category_type)

        return [self.expand_tree(root) for root in self.repository.find(*criteria)]

    def get_category(self, slug: str) -> CategoryResponse:
        category = self.repository.find_one(slug=slug)
        if not category:
            raise NotFoundError("No category found with that slug")
        return self.expand_tree(category)

    # Writes

    def create_category(
        self,
        payload: CategoryCreate,
        user_id: str,
        uploads: Sequence[StoredMedia] = (),
        alt_text: Optional[str] = None,
        parent_id: Optional[str] = None
    ) -> CategoryResponse:
        fields = payload.model_dump(exclude={"images"})
        fields["images"] = [image.model_dump(mode="json") for image in payload.images]
        if uploads:
            fields["images"] = self._images_from_uploads(uploads, alt_text)

        fields["parent_id"] = parent_id
        fields["created_by_id"] = user_id

        category = self.repository.create(fields)
        return CategoryResponse.model_validate(category)

    def update_category(
        self,
        category_id: str,
        payload: CategoryUpdate,
        user_id: str,
        uploads: Sequence[StoredMedia] = (),
        alt_text: Optional[str] = None,
        label: str = "category"
    ) -> CategoryResponse:
        category = self.repository.find_by_id(category_id)
        if not category:
            raise NotFoundError(f"No {label} found with that ID")

        fields = payload.model_dump(exclude_unset=True, exclude={"images"})

        new_images = None
        if uploads:
            new_images = self._images_from_uploads(uploads, alt_text)
        elif payload.images is not None:
            new_images = [image.model_dump(mode="json") for image in payload.images]

        # Replacing the image list releases every asset the old list owned
        if new_images is not None:
            self._delete_images(category)
            fields["images"] = new_images

        fields["updated_by_id"] = user_id

        updated = self.repository.find_by_id_and_update(category_id, fields)
        if not updated:
            raise NotFoundError(f"No {label} found with that ID")
        return CategoryResponse.model_validate(updated)

    def delete_category(self, category_id: str, label: str = "category") -> None:
        """Delete a category and its media. Children keep their now dangling parent_id."""
        category = self.repository.find_by_id(category_id)
        if not category:
            raise NotFoundError(f"No {label} found with that ID")

        self._delete_images(category)
        self.repository.find_by_id_and_delete(category_id)

    # Subcategories

    def create_subcategory(
        self,
        parent_id: str,
        payload: CategoryCreate,
        user_id: str,
        uploads: Sequence[StoredMedia] = (),
        alt_text: Optional[str] = None
    ) -> CategoryResponse:
        return self.create_category(payload, user_id, uploads, alt_text, parent_id=parent_id)

    def update_subcategory(
        self,
        subcategory_id: str,
        payload: CategoryUpdate,
        user_id: str,
        uploads: Sequence[StoredMedia] = (),
        alt_text: Optional[str] = None
    ) -> CategoryResponse:
        return self.update_category(
            subcategory_id, payload, user_id, uploads, alt_text, label="subcategory"
        )

    def delete_subcategory(self, subcategory_id: str) -> None:
        self.delete_category(subcategory_id, label="subcategory")

    def list_subcategories(
        self,
        parent_id: Optional[str] = None,
        sort: Optional[str] = None,
        fields: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[Dict[str, Any]], Pagination]:
        """
        Flat page of categories that have a parent, optionally under one parent.

        The total is counted before paging so it reflects the whole filtered
        population.
        """
        if parent_id:
            criteria = [Category.parent_id == parent_id]
        else:
            criteria = [Category.parent_id.is_not(None)]

        total = self.repository.count_documents(*criteria)

        features = QueryFeatures(
            self.repository.query(with_parent=True).filter(*criteria),
            Category,
            sort=sort,
            fields=fields,
            page=page,
            limit=limit
        )
        features.sort().limit_fields(SubCategoryResponse.model_fields).paginate(total)

        items = [
            SubCategoryResponse.model_validate(c).model_dump(mode="json", include=features.fields)
            for c in features.query.all()
        ]
        return items, features.pagination

    # Images

    def _images_from_uploads(
        self,
        uploads: Sequence[StoredMedia],
        alt_text: Optional[str]
    ) -> List[Dict[str, Any]]:
        """One image record per upload; the upload field name is the image type."""
        try:
            return [
                ImageSchema(
                    url=upload.url,
                    alt_text=alt_text or "",
                    type=upload.field_name,
                    id=upload.asset_id
                ).model_dump(mode="json")
                for upload in uploads
            ]
        except ValidationError as e:
            raise ValidationFailure.from_pydantic(e) from e

    def _delete_images(self, category: Category):
        for image in category.images or []:
            asset_id = image.get("id")
            if asset_id:
                self.media_store.delete(asset_id)
                logger.info(f"Removed image {asset_id} of category {category.id}")
