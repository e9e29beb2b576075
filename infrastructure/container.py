"""
Dependency Injection Container
================================

Composition root for the application. Builds each infrastructure
dependency and service once, lazily, and hands collaborators to services
through their constructors.

The container is created in ``MarketplaceConfig.ready()`` and stored on
the app config; there is no module-level instance.

Usage:
    from infrastructure.container import get_container

    product_service = get_container().product_service()
"""

import logging
from typing import Optional

from django.apps import apps

from .ai import GeminiClient, GeminiSettings, GenerativeClientInterface
from .database import MongoDbContext, MongoSettings
from .storage import StorageFactory, StorageInterface, StorageSettings

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure dependencies and domain services.

    Implements lazy initialization and caching of service instances.

    Args:
        storage_settings: Upload storage settings (FILE_STORAGE when omitted)
        mongo_settings: Document store settings (MONGODB when omitted)
        gemini_settings: Gemini settings (GEMINI when omitted)
        mongo_client: Pre-built client, e.g. ``mongomock.MongoClient()`` in tests
    """

    def __init__(
        self,
        storage_settings: Optional[StorageSettings] = None,
        mongo_settings: Optional[MongoSettings] = None,
        gemini_settings: Optional[GeminiSettings] = None,
        mongo_client=None,
    ):
        self._storage_settings = storage_settings
        self._mongo_settings = mongo_settings
        self._gemini_settings = gemini_settings
        self._mongo_client = mongo_client
        self._clear()
        logger.info("Service container initialized")

    def _clear(self):
        self._storage: Optional[StorageInterface] = None
        self._database: Optional[MongoDbContext] = None
        self._gemini_client: Optional[GenerativeClientInterface] = None
        self._prompt_templates = None

        # Domain Services
        self._view_tracker = None
        self._category_service = None
        self._product_service = None
        self._gemini_service = None

    # ----------------------------------------------------------- settings

    def storage_settings(self) -> StorageSettings:
        if self._storage_settings is None:
            self._storage_settings = StorageSettings.from_django_settings()
        return self._storage_settings

    def mongo_settings(self) -> MongoSettings:
        if self._mongo_settings is None:
            self._mongo_settings = MongoSettings.from_django_settings()
        return self._mongo_settings

    def gemini_settings(self) -> GeminiSettings:
        if self._gemini_settings is None:
            self._gemini_settings = GeminiSettings.from_django_settings()
        return self._gemini_settings

    # ----------------------------------------------------------- infrastructure

    def storage(self) -> StorageInterface:
        """
        Get storage service instance (local filesystem).

        Returns:
            StorageInterface implementation (cached)
        """
        if self._storage is None:
            self._storage = StorageFactory.create(self.storage_settings())
            logger.debug(f"Created storage service: {type(self._storage).__name__}")
        return self._storage

    def database(self) -> MongoDbContext:
        """Get the document store context (cached)."""
        if self._database is None:
            self._database = MongoDbContext(self.mongo_settings(), client=self._mongo_client)
            logger.debug("Created MongoDbContext")
        return self._database

    def gemini_client(self) -> GenerativeClientInterface:
        if self._gemini_client is None:
            self._gemini_client = GeminiClient(self.gemini_settings())
            logger.debug("Created GeminiClient")
        return self._gemini_client

    def prompt_templates(self):
        """Prompt templates, read from disk once."""
        if self._prompt_templates is None:
            from marketplace.services import PromptTemplates

            self._prompt_templates = PromptTemplates.load()
            logger.debug("Loaded prompt templates")
        return self._prompt_templates

    # ----------------------------------------------------------- domain services

    def view_tracker(self):
        """Get ViewCountTracker instance."""
        if self._view_tracker is None:
            from marketplace.async_tracking import ViewCountTracker

            self._view_tracker = ViewCountTracker(self.database())
            logger.debug("Created ViewCountTracker")
        return self._view_tracker

    def category_service(self):
        """Get CategoryService instance."""
        if self._category_service is None:
            from marketplace.services import CategoryService

            self._category_service = CategoryService(self.database())
            logger.debug("Created CategoryService")
        return self._category_service

    def product_service(self):
        """Get ProductService instance."""
        if self._product_service is None:
            from marketplace.services import ProductService

            # ProductService depends on CategoryService, storage and the view tracker
            self._product_service = ProductService(
                context=self.database(),
                category_service=self.category_service(),
                storage=self.storage(),
                view_tracker=self.view_tracker(),
            )
            logger.debug("Created ProductService")
        return self._product_service

    def gemini_service(self):
        """Get GeminiService instance."""
        if self._gemini_service is None:
            from marketplace.services import GeminiService

            self._gemini_service = GeminiService(
                client=self.gemini_client(),
                storage_settings=self.storage_settings(),
                templates=self.prompt_templates(),
            )
            logger.debug("Created GeminiService")
        return self._gemini_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        if self._view_tracker is not None:
            self._view_tracker.shutdown(wait=True)
        self._clear()
        logger.info("Service container reset")


def get_container() -> ServiceContainer:
    """Get the container built by the marketplace app at startup."""
    return apps.get_app_config("marketplace").container
