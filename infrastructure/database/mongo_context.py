"""
MongoDB Context
===============

Owns the client and exposes the collections used by the marketplace services.
"""

import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from .config import MongoSettings

logger = logging.getLogger(__name__)


class MongoDbContext:
    """
    Access point to the document store.

    Args:
        mongo_settings: Connection settings
        client: Pre-built client (tests pass a ``mongomock.MongoClient``)

    Example:
        >>> context = MongoDbContext(MongoSettings.from_django_settings())
        >>> context.categories.find_one({"slug": "cars"})
    """

    def __init__(self, mongo_settings: MongoSettings, client: Optional[MongoClient] = None):
        self.settings = mongo_settings
        if client is None:
            client = MongoClient(
                mongo_settings.connection_string,
                serverSelectionTimeoutMS=mongo_settings.server_selection_timeout_ms,
                tz_aware=True,
            )
            logger.info(f"MongoDB client created for database '{mongo_settings.database_name}'")
        self.client = client
        self.database: Database = client[mongo_settings.database_name]

    @property
    def categories(self) -> Collection:
        return self.database[self.settings.categories_collection]

    @property
    def products(self) -> Collection:
        return self.database[self.settings.products_collection]

    def close(self):
        self.client.close()
