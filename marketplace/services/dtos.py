"""
Read models returned by the marketplace services.

Each DTO is already resolved to a single language; the API serializers
render them as camelCase JSON.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from marketplace.domain import Category, Language, Product, ProductFile, ProductStatus


@dataclass
class CategoryDto:
    id: str
    slug: str
    name: str
    description: Optional[str]
    icon: Optional[str]
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, category: Category, language: Language) -> "CategoryDto":
        return cls(
            id=str(category.id),
            slug=category.slug,
            name=category.name.get(language),
            description=category.description.get(language) or None,
            icon=category.icon,
            display_order=category.display_order,
            is_active=category.is_active,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


@dataclass
class CategoryDetailDto:
    """Every language variant of a category, for administration screens."""

    id: str
    slug: str
    name_ru: str
    name_tj: str
    name_en: str
    description_ru: Optional[str]
    description_tj: Optional[str]
    description_en: Optional[str]
    icon: Optional[str]
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryDetailDto":
        return cls(
            id=str(category.id),
            slug=category.slug,
            name_ru=category.name.ru,
            name_tj=category.name.tj,
            name_en=category.name.en,
            description_ru=category.description.ru or None,
            description_tj=category.description.tj or None,
            description_en=category.description.en or None,
            icon=category.icon,
            display_order=category.display_order,
            is_active=category.is_active,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


@dataclass
class ProductListDto:
    id: str
    title: str
    price: Decimal
    status: ProductStatus
    thumbnail_url: Optional[str]
    location: Optional[str]
    view_count: int
    created_at: datetime
    published_at: Optional[datetime]

    @classmethod
    def from_entity(cls, product: Product) -> "ProductListDto":
        return cls(
            id=str(product.id),
            title=product.title,
            price=product.price,
            status=product.status,
            thumbnail_url=product.thumbnail_url,
            location=product.location,
            view_count=product.view_count,
            created_at=product.created_at,
            published_at=product.published_at,
        )


@dataclass
class ProductDto:
    id: str
    category_id: str
    category_name: Optional[str]
    title: str
    description: str
    price: Decimal
    status: ProductStatus
    files: List[ProductFile] = field(default_factory=list)
    dynamic_fields: Dict[str, str] = field(default_factory=dict)
    location: Optional[str] = None
    contact_phone: Optional[str] = None
    view_count: int = 0
    is_ai_generated: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, product: Product, category_name: Optional[str]) -> "ProductDto":
        return cls(
            id=str(product.id),
            category_id=str(product.category_id),
            category_name=category_name,
            title=product.title,
            description=product.description,
            price=product.price,
            status=product.status,
            files=sorted(product.files, key=lambda f: f.display_order),
            dynamic_fields=product.dynamic_fields,
            location=product.location,
            contact_phone=product.contact_phone,
            view_count=product.view_count,
            is_ai_generated=product.is_ai_generated,
            created_at=product.created_at,
            updated_at=product.updated_at,
            published_at=product.published_at,
        )


@dataclass
class GeminiGenerateResponse:
    """Raw JSON text returned by the model, passed through untouched."""

    raw_response: str = ""
