"""
Marketplace domain types: localization and the stored documents.
"""

from .localization import DEFAULT_LANGUAGE, Language, LocalizedString
from .models import Category, Product, ProductFile, ProductStatus, parse_object_id

__all__ = [
    "DEFAULT_LANGUAGE",
    "Language",
    "LocalizedString",
    "Category",
    "Product",
    "ProductFile",
    "ProductStatus",
    "parse_object_id",
]
