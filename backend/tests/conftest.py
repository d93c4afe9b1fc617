"""Shared test fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from catalog.database import Base, get_db
from catalog.exceptions import MediaStoreError
from catalog.main import app
from catalog.models.user import User
from catalog.repositories.category_repository import CategoryRepository
from catalog.schemas.category import CategoryCreate
from catalog.services.category_service import CategoryService
from catalog.services.media_store import MediaStore, StoredMedia, get_media_store


class RecordingMediaStore(MediaStore):
    """In-memory media store that records every save and delete."""

    def __init__(self):
        self.assets = {}
        self.deleted = []

    def save(self, content, filename, field_name):
        asset_id = f"test/{uuid.uuid4().hex}"
        self.assets[asset_id] = content
        return StoredMedia(
            asset_id=asset_id,
            url=f"https://media.test/{asset_id}",
            field_name=field_name
        )

    def delete(self, asset_id):
        self.deleted.append(asset_id)
        self.assets.pop(asset_id, None)


class FailingMediaStore(RecordingMediaStore):
    """Media store whose deletes always fail, as when the remote store is down."""

    def delete(self, asset_id):
        raise MediaStoreError(f"Could not delete media asset {asset_id}")


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def media_store():
    """Media store double."""
    return RecordingMediaStore()


@pytest.fixture
def service(db_session, media_store):
    """Category service over the test database and media store double."""
    return CategoryService(CategoryRepository(db_session), media_store)


@pytest.fixture
def failing_media_store():
    """Media store double that cannot delete."""
    return FailingMediaStore()


@pytest.fixture
def failing_service(db_session, failing_media_store):
    """Category service whose media deletes fail."""
    return CategoryService(CategoryRepository(db_session), failing_media_store)


@pytest.fixture(scope="function")
def client(db_session, media_store):
    """Create a test client with database and media store overrides."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_store] = lambda: media_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def editor(db_session):
    """Create the acting user."""
    user = User(id=str(uuid.uuid4()), name="Catalog Editor", email="editor@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(editor):
    """Headers identifying the acting user."""
    return {"X-User-Id": editor.id}


@pytest.fixture
def category_tree(service, editor):
    """Root category A with child B, which has child C."""
    a = service.create_category(CategoryCreate(name="A"), editor.id)
    b = service.create_subcategory(a.id, CategoryCreate(name="B"), editor.id)
    c = service.create_subcategory(b.id, CategoryCreate(name="C"), editor.id)
    return {"A": a, "B": b, "C": c}
