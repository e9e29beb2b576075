"""
Database Initializer
====================

Creates collections and indexes and seeds the initial categories.
Run through ``python manage.py init_db``; every step is idempotent.
"""

import logging
from datetime import datetime, timezone
from typing import List

from pymongo import ASCENDING, DESCENDING, TEXT, IndexModel
from pymongo.errors import PyMongoError

from .mongo_context import MongoDbContext

logger = logging.getLogger(__name__)

SEED_CATEGORIES = [
    {
        "slug": "real-estate",
        "name": {"ru": "Недвижимость", "tj": "Молу мулк", "en": "Real Estate"},
        "description": {
            "ru": "Квартиры, дома, коммерческая недвижимость, аренда",
            "tj": "Хонаҳо, биноҳо, амволи тиҷоратӣ, иҷора",
            "en": "Apartments, houses, commercial real estate, rent",
        },
        "icon": "🏠",
        "displayOrder": 1,
    },
    {
        "slug": "cars",
        "name": {"ru": "Автомобили", "tj": "Автомобилҳо", "en": "Cars"},
        "description": {
            "ru": "Легковые автомобили, внедорожники, грузовики, мотоциклы",
            "tj": "Автомобилҳои сабук, автомобилҳои ҷангалӣ, мошинҳои боркаш, мотоциклҳо",
            "en": "Passenger cars, SUVs, trucks, motorcycles",
        },
        "icon": "🚗",
        "displayOrder": 2,
    },
    {
        "slug": "general-goods",
        "name": {"ru": "Общие товары", "tj": "Молҳои умумӣ", "en": "General Goods"},
        "description": {
            "ru": "Электроника, мебель, одежда, техника и другие товары",
            "tj": "Электроника, мебел, либос, техника ва молҳои дигар",
            "en": "Electronics, furniture, clothing, appliances and other goods",
        },
        "icon": "📦",
        "displayOrder": 3,
    },
]

CATEGORY_INDEXES = [
    IndexModel([("slug", ASCENDING)], name="idx_slug_unique", unique=True),
    IndexModel([("isActive", ASCENDING), ("displayOrder", ASCENDING)], name="idx_isactive_displayorder"),
]

PRODUCT_INDEXES = [
    IndexModel([("categoryId", ASCENDING), ("createdAt", DESCENDING)], name="idx_categoryid_createdat"),
    IndexModel([("status", ASCENDING), ("publishedAt", DESCENDING)], name="idx_status_publishedat"),
    IndexModel([("title", TEXT)], name="idx_title_text"),
    IndexModel([("createdAt", DESCENDING)], name="idx_createdat_desc"),
]


class DatabaseInitializer:
    """
    One-shot database bootstrap.

    Driver errors are logged and re-raised: a half-initialized database
    should stop the deployment, not be silently ignored.
    """

    def __init__(self, context: MongoDbContext):
        self.context = context

    def initialize(self) -> None:
        logger.info(f"Initializing database '{self.context.settings.database_name}'")
        try:
            self.create_collections()
            self.create_indexes()
            seeded = self.seed_categories()
        except PyMongoError as e:
            logger.error(f"Database initialization failed: {e}", exc_info=True)
            raise
        logger.info(f"Database initialized ({seeded} categories seeded)")

    def create_collections(self) -> List[str]:
        """Create missing collections, returns the names created."""
        database = self.context.database
        existing = set(database.list_collection_names())
        created = []
        for name in (self.context.settings.categories_collection, self.context.settings.products_collection):
            if name in existing:
                logger.info(f"'{name}' collection already exists")
                continue
            database.create_collection(name)
            created.append(name)
            logger.info(f"Created '{name}' collection")
        return created

    def create_indexes(self) -> None:
        self.context.categories.create_indexes(CATEGORY_INDEXES)
        logger.info(f"Created {len(CATEGORY_INDEXES)} indexes for categories")
        self.context.products.create_indexes(PRODUCT_INDEXES)
        logger.info(f"Created {len(PRODUCT_INDEXES)} indexes for products")

    def seed_categories(self) -> int:
        """Insert the initial categories when the collection is empty."""
        collection = self.context.categories
        if collection.count_documents({}) > 0:
            logger.info("Categories already seeded, skipping")
            return 0

        now = datetime.now(timezone.utc)
        documents = [
            {**category, "isActive": True, "createdAt": now, "updatedAt": now} for category in SEED_CATEGORIES
        ]
        collection.insert_many(documents)
        logger.info(f"Seeded {len(documents)} categories")
        return len(documents)
