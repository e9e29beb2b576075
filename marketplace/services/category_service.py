"""
CategoryService - Localized category lookups

Reads categories from the document store and resolves their names and
descriptions into the requested language.
"""

import logging
from typing import List, Optional

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from infrastructure.database import MongoDbContext
from marketplace.domain import Category, Language, parse_object_id

from .base import BaseService, ResultError, ServiceResult, service_err, service_ok
from .dtos import CategoryDetailDto, CategoryDto


class CategoryService(BaseService):
    """
    Service for category browsing.

    Responsibilities:
    - List active categories in display order
    - Get a category by id or slug (inactive ones are hidden)
    - Get every language variant of a category (administration)
    """

    def __init__(self, context: MongoDbContext, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.context = context

    @BaseService.log_performance
    def list_categories(self, language: Language) -> ServiceResult[List[CategoryDto]]:
        """
        List active categories ordered by displayOrder ascending.

        Example:
            >>> result = category_service.list_categories(Language.TAJIK)
            >>> [c.name for c in result.value]
            ['Молу мулк', 'Автомобилҳо', 'Молҳои умумӣ']
        """
        self.logger.info(f"Retrieving all active categories for language: {language.code}")
        try:
            documents = self.context.categories.find({"isActive": True}).sort("displayOrder", ASCENDING)
            categories = [CategoryDto.from_entity(Category.from_document(d), language) for d in documents]
        except PyMongoError as e:
            self.logger.error(f"[list_categories] MongoDB error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Database error while retrieving categories"))
        except Exception as e:
            self.logger.error(f"[list_categories] Unexpected error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Failed to retrieve categories"))

        self.logger.info(f"Retrieved {len(categories)} categories")
        return service_ok(categories)

    @BaseService.log_performance
    def get_by_id(self, category_id: str, language: Language) -> ServiceResult[CategoryDto]:
        object_id = parse_object_id(category_id)
        if object_id is None:
            return service_err(ResultError.bad_request(f"Invalid category ID format: {category_id}"))

        return self._find_one(
            {"_id": object_id, "isActive": True},
            not_found=f"Category with ID '{category_id}' not found",
            operation="get_by_id",
        ).map(lambda category: CategoryDto.from_entity(category, language))

    @BaseService.log_performance
    def get_by_slug(self, slug: str, language: Language) -> ServiceResult[CategoryDto]:
        if not slug or not slug.strip():
            return service_err(ResultError.bad_request("Category slug cannot be empty"))

        return self._find_one(
            {"slug": slug.strip().lower(), "isActive": True},
            not_found=f"Category '{slug}' not found",
            operation="get_by_slug",
        ).map(lambda category: CategoryDto.from_entity(category, language))

    @BaseService.log_performance
    def get_detail(self, category_id: str) -> ServiceResult[CategoryDetailDto]:
        """Get all language variants of a category, including inactive ones."""
        object_id = parse_object_id(category_id)
        if object_id is None:
            return service_err(ResultError.bad_request(f"Invalid category ID format: {category_id}"))

        return self._find_one(
            {"_id": object_id},
            not_found=f"Category with ID '{category_id}' not found",
            operation="get_detail",
        ).map(CategoryDetailDto.from_entity)

    def get_entity(self, category_id) -> ServiceResult[Category]:
        """Active category entity by id, for use by other services."""
        object_id = parse_object_id(category_id)
        if object_id is None:
            return service_err(ResultError.bad_request(f"Invalid category ID format: {category_id}"))
        return self._find_one(
            {"_id": object_id, "isActive": True},
            not_found=f"Category with ID '{category_id}' not found",
            operation="get_entity",
        )

    def _find_one(self, query: dict, not_found: str, operation: str) -> ServiceResult[Category]:
        try:
            document = self.context.categories.find_one(query)
        except PyMongoError as e:
            self.logger.error(f"[{operation}] MongoDB error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Database error while retrieving category"))
        except Exception as e:
            self.logger.error(f"[{operation}] Unexpected error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Failed to retrieve category"))

        if document is None:
            self.logger.warning(f"[{operation}] {not_found}")
            return service_err(ResultError.not_found(not_found))

        category = Category.from_document(document)
        self.logger.info(f"Category found: {category.slug}")
        return service_ok(category)
