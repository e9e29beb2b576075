"""
ProductService - Product listings with media

Handles listing, reading, creating, updating and deleting products.
Media files go through the storage abstraction as best-effort batches:
a file that fails to upload or delete is logged and skipped, never fatal
to the product operation.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from bson.decimal128 import Decimal128
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from infrastructure.database import MongoDbContext
from infrastructure.storage import StorageInterface
from marketplace.async_tracking import ViewCountTracker
from marketplace.domain import DEFAULT_LANGUAGE, Language, Product, ProductFile, ProductStatus, parse_object_id
from marketplace.domain.models import utc_now

from .base import BaseService, ResultError, ServiceResult, service_err, service_ok
from .category_service import CategoryService
from .dtos import ProductDto, ProductListDto

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Request field -> document field for partial updates
UPDATABLE_FIELDS = {
    "title": "title",
    "description": "description",
    "price": "price",
    "dynamic_fields": "dynamicFields",
    "location": "location",
    "contact_phone": "contactPhone",
}


class ProductService(BaseService):
    """
    Service for product listings.

    Responsibilities:
    - List published products, newest first, optionally by category
    - Get product details (schedules a view-count increment)
    - Create products with attached images/videos (published immediately)
    - Partially update product fields
    - Delete products together with their stored files

    All operations return ServiceResult; driver errors become
    InternalServerError.
    """

    def __init__(
        self,
        context: MongoDbContext,
        category_service: CategoryService,
        storage: StorageInterface,
        view_tracker: ViewCountTracker,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize ProductService.

        Args:
            context: Document store access
            category_service: Category lookups for validation and names
            storage: Media storage (injected via the container)
            view_tracker: Background view counter
            logger: Optional logger override
        """
        super().__init__(logger)
        self.context = context
        self.category_service = category_service
        self.storage = storage
        self.view_tracker = view_tracker

    @BaseService.log_performance
    def list_products(
        self,
        category_id: Optional[str] = None,
        language: Language = DEFAULT_LANGUAGE,
        skip: int = 0,
        take: int = DEFAULT_PAGE_SIZE,
    ) -> ServiceResult[List[ProductListDto]]:
        """
        List published products, newest first.

        Args:
            category_id: Optional category filter
            language: Requested language
            skip: Number of products to skip (negative becomes 0)
            take: Page size, clamped to 1..100

        Example:
            >>> result = product_service.list_products(category_id=cars_id, take=10)
            >>> result.value[0].thumbnail_url
            '/uploads/images/0b6f...png'
        """
        skip = max(int(skip or 0), 0)
        take = min(max(DEFAULT_PAGE_SIZE if take is None else int(take), 1), MAX_PAGE_SIZE)
        self.logger.info(
            f"Retrieving products: CategoryId={category_id}, Language={language.code}, Skip={skip}, Take={take}"
        )

        query: Dict[str, Any] = {"status": int(ProductStatus.PUBLISHED)}
        if category_id:
            object_id = parse_object_id(category_id)
            if object_id is None:
                return service_err(ResultError.bad_request(f"Invalid category ID format: {category_id}"))
            query["categoryId"] = object_id

        try:
            cursor = self.context.products.find(query).sort("createdAt", DESCENDING).skip(skip).limit(take)
            products = [ProductListDto.from_entity(Product.from_document(d)) for d in cursor]
        except PyMongoError as e:
            self.logger.error(f"[list_products] MongoDB error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Database error while retrieving products"))
        except Exception as e:
            self.logger.error(f"[list_products] Unexpected error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Failed to retrieve products"))

        self.logger.info(f"Retrieved {len(products)} products")
        return service_ok(products)

    @BaseService.log_performance
    def get_product(self, product_id: str, language: Language = DEFAULT_LANGUAGE) -> ServiceResult[ProductDto]:
        """
        Get product details.

        The view counter is incremented in the background; the returned
        DTO carries the count as read.
        """
        found = self._load(product_id, operation="get_product")
        if not found.ok:
            return found

        product = found.value
        self.view_tracker.track_view(product.id)
        return service_ok(self._to_dto(product, language))

    @BaseService.log_performance
    def create_product(
        self,
        data: Dict[str, Any],
        files: Optional[Iterable] = None,
        language: Language = DEFAULT_LANGUAGE,
    ) -> ServiceResult[ProductDto]:
        """
        Create a published product and upload its files.

        Args:
            data: Validated fields (category_id, title, description, price,
                dynamic_fields, location, contact_phone, is_ai_generated)
            files: Uploaded files; failures are logged and skipped
            language: Language for the returned category name

        Returns:
            ServiceResult with the created ProductDto
        """
        category_id = data.get("category_id")
        self.logger.info(f"Creating product: {data.get('title')}")

        category = self.category_service.get_entity(category_id)
        if not category.ok:
            return service_err(category.error)

        product_files = self._upload_files(list(files or []))

        now = utc_now()
        product = Product(
            category_id=category.value.id,
            title=data["title"],
            description=data.get("description") or "",
            price=Decimal(str(data.get("price", 0))),
            files=product_files,
            dynamic_fields=dict(data.get("dynamic_fields") or {}),
            location=data.get("location"),
            contact_phone=data.get("contact_phone"),
            is_ai_generated=bool(data.get("is_ai_generated", False)),
            created_at=now,
            updated_at=now,
        )
        product.publish(now)

        try:
            inserted = self.context.products.insert_one(product.to_document())
        except PyMongoError as e:
            self.logger.error(f"[create_product] MongoDB error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Database error while creating product"))
        except Exception as e:
            self.logger.error(f"[create_product] Unexpected error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Failed to create product"))

        product.id = inserted.inserted_id
        self.logger.info(f"Product created successfully: ID={product.id}, Files={len(product_files)}")
        return service_ok(ProductDto.from_entity(product, category.value.name.get(language)))

    @BaseService.log_performance
    def update_product(
        self, product_id: str, data: Dict[str, Any], language: Language = DEFAULT_LANGUAGE
    ) -> ServiceResult[ProductDto]:
        """
        Partially update a product. Only keys present in ``data`` change.
        """
        object_id = parse_object_id(product_id)
        if object_id is None:
            return service_err(ResultError.bad_request(f"Invalid product ID format: {product_id}"))

        changes = {UPDATABLE_FIELDS[k]: v for k, v in data.items() if k in UPDATABLE_FIELDS}
        if not changes:
            return service_err(ResultError.bad_request("No fields to update"))
        if "price" in changes:
            changes["price"] = Decimal128(Decimal(str(changes["price"])))
        changes["updatedAt"] = utc_now()

        try:
            document = self.context.products.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            self.logger.error(f"[update_product] MongoDB error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Database error while updating product"))
        except Exception as e:
            self.logger.error(f"[update_product] Unexpected error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Failed to update product"))

        if document is None:
            return service_err(ResultError.not_found(f"Product with ID '{product_id}' not found"))

        self.logger.info(f"Product updated: ID={product_id}, Fields={sorted(changes)}")
        return service_ok(self._to_dto(Product.from_document(document), language))

    @BaseService.log_performance
    def delete_product(self, product_id: str) -> ServiceResult[bool]:
        """
        Delete a product and, best-effort, its stored files.

        File deletion failures are logged and do not block the delete.
        """
        found = self._load(product_id, operation="delete_product")
        if not found.ok:
            return service_err(found.error, value=False)

        product = found.value
        if product.files:
            self.logger.info(f"Deleting {len(product.files)} files")
            for attempt in self.storage.delete_many([f.file_path for f in product.files]):
                if attempt.result.ok:
                    self.logger.info(f"Deleted file: {attempt.relative_path}")
                else:
                    self.logger.warning(
                        f"Failed to delete file '{attempt.relative_path}': {attempt.result.error_detail}"
                    )

        try:
            self.context.products.delete_one({"_id": product.id})
        except PyMongoError as e:
            self.logger.error(f"[delete_product] MongoDB error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Database error while deleting product"), value=False)
        except Exception as e:
            self.logger.error(f"[delete_product] Unexpected error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Failed to delete product"), value=False)

        self.logger.info(f"Product deleted successfully: {product_id}")
        return service_ok(True)

    # ------------------------------------------------------------------ helpers

    def _load(self, product_id: str, operation: str) -> ServiceResult[Product]:
        object_id = parse_object_id(product_id)
        if object_id is None:
            self.logger.warning(f"[{operation}] Invalid ObjectId format: {product_id}")
            return service_err(ResultError.bad_request(f"Invalid product ID format: {product_id}"))

        try:
            document = self.context.products.find_one({"_id": object_id})
        except PyMongoError as e:
            self.logger.error(f"[{operation}] MongoDB error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Database error while retrieving product"))
        except Exception as e:
            self.logger.error(f"[{operation}] Unexpected error: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Failed to retrieve product"))

        if document is None:
            self.logger.warning(f"[{operation}] Product not found: {product_id}")
            return service_err(ResultError.not_found(f"Product with ID '{product_id}' not found"))

        return service_ok(Product.from_document(document))

    def _upload_files(self, files: List) -> List[ProductFile]:
        if not files:
            return []

        self.logger.info(f"Uploading {len(files)} files")
        product_files = []
        for attempt in self.storage.upload_many(files):
            if not attempt.result.ok:
                self.logger.warning(f"Failed to upload file '{attempt.original_name}': {attempt.result.error_detail}")
                continue
            product_files.append(ProductFile.from_upload(attempt.result.value, display_order=len(product_files)))
            self.logger.info(f"File uploaded: {attempt.result.value.stored_name}")

        self.logger.info(f"Successfully uploaded {len(product_files)} of {len(files)} files")
        return product_files

    def _to_dto(self, product: Product, language: Language) -> ProductDto:
        category = self.category_service.get_by_id(str(product.category_id), language)
        category_name = category.value.name if category.ok else None
        return ProductDto.from_entity(product, category_name)
