"""
Marketplace Service Layer

This package contains the business logic for the classifieds API,
organized into domain services that receive their collaborators through
their constructors.

Services:
- CategoryService: Localized category lookups
- ProductService: Product listings with media uploads
- GeminiService: AI-assisted listing drafts

Usage:
    from marketplace.services import ProductService

    result = product_service.get_product(product_id, Language.ENGLISH)

    if result.ok:
        product = result.value
    else:
        error = result.error
"""

from .base import BaseService, ErrorKind, ResultError, ServiceResult, service_err, service_ok
from .category_service import CategoryService
from .dtos import CategoryDetailDto, CategoryDto, GeminiGenerateResponse, ProductDto, ProductListDto
from .gemini_service import GeminiService
from .product_service import ProductService
from .prompt_builder import PromptTemplates, build_prompt

__all__ = [
    # Base classes
    "BaseService",
    "ErrorKind",
    "ResultError",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    # DTOs
    "CategoryDto",
    "CategoryDetailDto",
    "ProductDto",
    "ProductListDto",
    "GeminiGenerateResponse",
    # Services
    "CategoryService",
    "ProductService",
    "GeminiService",
    # Prompts
    "PromptTemplates",
    "build_prompt",
]
