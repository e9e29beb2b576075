"""
MongoDB Settings
================

Document store configuration, read from the ``MONGODB`` dict in Django settings.
"""

from dataclasses import dataclass
from typing import Optional

from django.conf import settings


@dataclass
class MongoSettings:
    """
    Connection settings for the document store.

    Attributes:
        connection_string: MongoDB URI, e.g. "mongodb://localhost:27017"
        database_name: Database holding the collections
        categories_collection: Categories collection name
        products_collection: Products collection name
        server_selection_timeout_ms: How long the driver waits for a server
    """

    connection_string: str = "mongodb://localhost:27017"
    database_name: str = "somon"
    categories_collection: str = "categories"
    products_collection: str = "products"
    server_selection_timeout_ms: int = 5000

    @classmethod
    def from_django_settings(cls, overrides: Optional[dict] = None) -> "MongoSettings":
        config = dict(getattr(settings, "MONGODB", {}))
        config.update(overrides or {})
        return cls(
            connection_string=config.get("URI", cls.connection_string),
            database_name=config.get("DATABASE", cls.database_name),
            categories_collection=config.get("CATEGORIES_COLLECTION", cls.categories_collection),
            products_collection=config.get("PRODUCTS_COLLECTION", cls.products_collection),
            server_selection_timeout_ms=int(
                config.get("SERVER_SELECTION_TIMEOUT_MS", cls.server_selection_timeout_ms)
            ),
        )
