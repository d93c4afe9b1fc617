"""
Category database model.
"""

import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Enum, Float, Text, JSON, Index
from sqlalchemy.orm import relationship
from catalog.database import Base


class CategoryType(str, enum.Enum):
    """Category display type."""
    mega = "mega"
    normal = "normal"


class ImageType(str, enum.Enum):
    """Slot an image is shown in."""
    thumbnail = "thumbnail"
    banner = "banner"
    mobile = "mobile"
    gallery = "gallery"


class Category(Base):
    """Category model with self-referential parent link.

    ``parent_id`` is a plain reference column rather than a foreign key:
    deleting a category leaves its children pointing at the removed id.
    """

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), unique=True, nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    type = Column(Enum(CategoryType), default=CategoryType.normal, nullable=False)
    parent_id = Column(String(36), nullable=True)
    ancestors = Column(JSON, default=list, nullable=False)  # Stored, not maintained
    description = Column(Text, nullable=True)
    meta_title = Column(String(255), nullable=True)
    meta_description = Column(Text, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    images = Column(JSON, default=list, nullable=False)  # Embedded image records
    popularity_score = Column(Float, default=0, nullable=False)
    created_by_id = Column(String(36), nullable=False)
    updated_by_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships (read-only lookups over reference columns)
    parent = relationship(
        "Category",
        primaryjoin="foreign(Category.parent_id) == Category.id",
        remote_side="Category.id",
        viewonly=True,
    )
    created_by = relationship(
        "User",
        primaryjoin="foreign(Category.created_by_id) == User.id",
        viewonly=True,
    )
    updated_by = relationship(
        "User",
        primaryjoin="foreign(Category.updated_by_id) == User.id",
        viewonly=True,
    )

    __table_args__ = (
        Index("idx_category_parent", "parent_id"),
    )

    def __repr__(self) -> str:
        return f"<Category {self.slug}>"
