"""
Seed script for a default editor and a starter category tree.
"""

from catalog.database import SessionLocal, init_db
from catalog.models import Category, CategoryType, User
from catalog.repositories.category_repository import CategoryRepository
from catalog.schemas.category import CategoryCreate
from catalog.services.category_service import CategoryService
from catalog.services.media_store import get_media_store
import uuid


# Nested tree: each entry may carry its own "children"
CATEGORIES_DATA = [
    {
        "name": "Fashion",
        "type": CategoryType.mega,
        "children": [
            {
                "name": "Men",
                "children": [
                    {"name": "Shirts"},
                    {"name": "Trousers"},
                    {"name": "Men's Shoes"},
                ]
            },
            {
                "name": "Women",
                "children": [
                    {"name": "Dresses"},
                    {"name": "Tops"},
                    {"name": "Women's Shoes"},
                ]
            },
            {"name": "Accessories"},
        ]
    },
    {
        "name": "Electronics",
        "type": CategoryType.mega,
        "children": [
            {
                "name": "Computers",
                "children": [
                    {"name": "Laptops"},
                    {"name": "Desktops"},
                    {"name": "Monitors"},
                ]
            },
            {"name": "Phones & Tablets"},
            {"name": "Audio"},
        ]
    },
    {
        "name": "Home & Kitchen",
        "children": [
            {"name": "Furniture"},
            {"name": "Cookware"},
            {"name": "Bedding"},
        ]
    },
    {"name": "Books"},
    {"name": "Toys & Games"},
]


def _create_tree(service: CategoryService, user_id: str, nodes: list, parent_id: str = None) -> int:
    created = 0
    for node in nodes:
        payload = CategoryCreate(name=node["name"], type=node.get("type", CategoryType.normal))
        if parent_id:
            category = service.create_subcategory(parent_id, payload, user_id)
        else:
            category = service.create_category(payload, user_id)
        created += 1 + _create_tree(service, user_id, node.get("children", []), category.id)
    return created


def seed_categories():
    """Seed the default editor and category tree into the database."""

    init_db()
    db = SessionLocal()

    try:
        # Check if categories already exist
        existing_count = db.query(Category).count()
        if existing_count > 0:
            print(f"Categories already seeded ({existing_count} categories exist)")
            return

        editor = db.query(User).filter(User.email == "catalog@example.com").first()
        if not editor:
            editor = User(id=str(uuid.uuid4()), name="Catalog Admin", email="catalog@example.com")
            db.add(editor)
            db.commit()

        service = CategoryService(CategoryRepository(db), get_media_store())
        created = _create_tree(service, editor.id, CATEGORIES_DATA)
        print(f"Successfully seeded {created} categories for editor {editor.id}")

    except Exception as e:
        print(f"Error seeding categories: {e}")
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    seed_categories()
