"""
Shared pytest fixtures.

The document store is replaced with mongomock and uploads go to a
per-test temporary directory, so no external service is needed.
"""

from unittest.mock import MagicMock

import mongomock
import pytest
from django.apps import apps
from django.core.files.uploadedfile import SimpleUploadedFile

from infrastructure.container import ServiceContainer
from infrastructure.database import DatabaseInitializer, MongoDbContext, MongoSettings
from infrastructure.storage import LocalFileStorage, StorageSettings


def make_upload(name: str, size: int = 1024, content_type: str = "image/jpeg") -> SimpleUploadedFile:
    """In-memory upload of ``size`` bytes."""
    return SimpleUploadedFile(name, b"x" * size, content_type=content_type)


@pytest.fixture
def upload():
    """Factory fixture building in-memory uploads."""
    return make_upload


@pytest.fixture
def storage_settings(tmp_path):
    return StorageSettings(web_root=tmp_path / "wwwroot", max_image_size_mb=10, max_video_size_mb=100)


@pytest.fixture
def storage(storage_settings):
    return LocalFileStorage(storage_settings)


@pytest.fixture
def mongo_settings():
    return MongoSettings(database_name="somon_test")


@pytest.fixture
def mongo_context(mongo_settings):
    return MongoDbContext(mongo_settings, client=mongomock.MongoClient())


@pytest.fixture
def seeded_context(mongo_context):
    """Document store holding the three initial categories."""
    DatabaseInitializer(mongo_context).seed_categories()
    return mongo_context


@pytest.fixture
def category_ids(seeded_context):
    """Slug -> ObjectId string of the seeded categories."""
    return {doc["slug"]: str(doc["_id"]) for doc in seeded_context.categories.find()}


@pytest.fixture
def gemini_client():
    return MagicMock()


@pytest.fixture
def app_container(storage_settings, mongo_settings, seeded_context, gemini_client):
    """
    Install a test ServiceContainer on the marketplace app config.

    Shares the seeded mongomock client and the temporary storage root.
    """
    app_config = apps.get_app_config("marketplace")
    original = app_config.container

    container = ServiceContainer(
        storage_settings=storage_settings,
        mongo_settings=mongo_settings,
        mongo_client=seeded_context.client,
    )
    container._gemini_client = gemini_client
    app_config.container = container

    yield container

    container.reset()
    app_config.container = original
