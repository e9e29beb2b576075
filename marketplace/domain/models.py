"""
Stored documents for the marketplace.

Categories and products live in MongoDB. Field names in the documents are
camelCase; the dataclasses below convert to and from them.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import IntEnum
from typing import Dict, List, Optional

from bson import ObjectId
from bson.decimal128 import Decimal128

from infrastructure.storage import FileUploadOutcome, MediaKind

from .localization import LocalizedString


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


class ProductStatus(IntEnum):
    DRAFT = 0
    PUBLISHED = 1
    ARCHIVED = 2


@dataclass
class Category:
    slug: str
    name: LocalizedString
    description: LocalizedString = field(default_factory=LocalizedString)
    icon: Optional[str] = None
    display_order: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    id: Optional[ObjectId] = None

    @classmethod
    def from_document(cls, document: dict) -> "Category":
        return cls(
            id=document.get("_id"),
            slug=document.get("slug", ""),
            name=LocalizedString.from_document(document.get("name")),
            description=LocalizedString.from_document(document.get("description")),
            icon=document.get("icon"),
            display_order=int(document.get("displayOrder", 0)),
            is_active=bool(document.get("isActive", True)),
            created_at=document.get("createdAt"),
            updated_at=document.get("updatedAt"),
        )

    def to_document(self) -> dict:
        document = {
            "slug": self.slug,
            "name": self.name.to_document(),
            "description": self.description.to_document(),
            "icon": self.icon,
            "displayOrder": self.display_order,
            "isActive": self.is_active,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.id is not None:
            document["_id"] = self.id
        return document


@dataclass
class ProductFile:
    """A stored media file attached to a product."""

    file_name: str
    file_path: str
    file_size_bytes: int
    mime_type: str
    media_kind: MediaKind
    display_order: int = 0
    uploaded_at: datetime = field(default_factory=utc_now)

    @property
    def file_url(self) -> str:
        return f"/{self.file_path}"

    @classmethod
    def from_upload(cls, outcome: FileUploadOutcome, display_order: int) -> "ProductFile":
        return cls(
            file_name=outcome.stored_name,
            file_path=outcome.relative_path,
            file_size_bytes=outcome.size_bytes,
            mime_type=outcome.mime_type,
            media_kind=outcome.media_kind,
            display_order=display_order,
            uploaded_at=outcome.uploaded_at,
        )

    @classmethod
    def from_document(cls, document: dict) -> "ProductFile":
        return cls(
            file_name=document.get("fileName", ""),
            file_path=document.get("filePath", ""),
            file_size_bytes=int(document.get("fileSizeBytes", 0)),
            mime_type=document.get("mimeType", ""),
            media_kind=MediaKind(document.get("fileType", MediaKind.IMAGE.value)),
            display_order=int(document.get("displayOrder", 0)),
            uploaded_at=document.get("uploadedAt"),
        )

    def to_document(self) -> dict:
        return {
            "fileName": self.file_name,
            "filePath": self.file_path,
            "fileSizeBytes": self.file_size_bytes,
            "mimeType": self.mime_type,
            "fileType": self.media_kind.value,
            "displayOrder": self.display_order,
            "uploadedAt": self.uploaded_at,
        }


@dataclass
class Product:
    category_id: ObjectId
    title: str
    description: str
    price: Decimal
    status: ProductStatus = ProductStatus.DRAFT
    files: List[ProductFile] = field(default_factory=list)
    dynamic_fields: Dict[str, str] = field(default_factory=dict)
    location: Optional[str] = None
    contact_phone: Optional[str] = None
    view_count: int = 0
    is_ai_generated: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    published_at: Optional[datetime] = None
    id: Optional[ObjectId] = None

    @property
    def thumbnail_url(self) -> Optional[str]:
        """URL of the first image, by display order."""
        images = [f for f in self.files if f.media_kind is MediaKind.IMAGE]
        if not images:
            return None
        return min(images, key=lambda f: f.display_order).file_url

    def publish(self, when: Optional[datetime] = None) -> None:
        self.status = ProductStatus.PUBLISHED
        self.published_at = when or utc_now()

    @classmethod
    def from_document(cls, document: dict) -> "Product":
        return cls(
            id=document.get("_id"),
            category_id=document.get("categoryId"),
            title=document.get("title", ""),
            description=document.get("description", ""),
            price=_to_decimal(document.get("price")),
            status=ProductStatus(int(document.get("status", ProductStatus.DRAFT))),
            files=[ProductFile.from_document(f) for f in document.get("files") or []],
            dynamic_fields=dict(document.get("dynamicFields") or {}),
            location=document.get("location"),
            contact_phone=document.get("contactPhone"),
            view_count=int(document.get("viewCount", 0)),
            is_ai_generated=bool(document.get("isAiGenerated", False)),
            created_at=document.get("createdAt"),
            updated_at=document.get("updatedAt"),
            published_at=document.get("publishedAt"),
        )

    def to_document(self) -> dict:
        document = {
            "categoryId": self.category_id,
            "title": self.title,
            "description": self.description,
            "price": Decimal128(self.price),
            "status": int(self.status),
            "files": [f.to_document() for f in self.files],
            "dynamicFields": self.dynamic_fields,
            "location": self.location,
            "contactPhone": self.contact_phone,
            "viewCount": self.view_count,
            "isAiGenerated": self.is_ai_generated,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "publishedAt": self.published_at,
        }
        if self.id is not None:
            document["_id"] = self.id
        return document


def parse_object_id(value) -> Optional[ObjectId]:
    """ObjectId for a 24-hex-digit string, None when malformed."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str):
        value = value.strip()
        if len(value) == 24 and ObjectId.is_valid(value):
            return ObjectId(value)
    return None
