"""
Document Store Layer
====================

MongoDB access for categories and products.
"""

from .config import MongoSettings
from .initializer import DatabaseInitializer
from .mongo_context import MongoDbContext

__all__ = ["MongoSettings", "MongoDbContext", "DatabaseInitializer"]
