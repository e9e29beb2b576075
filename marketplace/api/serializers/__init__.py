# Marketplace API Serializers

from .ai_serializers import GeminiGenerateRequestSerializer, GeminiGenerateResponseSerializer
from .category_serializers import CategoryDetailSerializer, CategorySerializer
from .product_serializers import (
    DynamicFieldsField,
    ProductCreateRequestSerializer,
    ProductFileSerializer,
    ProductListSerializer,
    ProductSerializer,
    ProductUpdateRequestSerializer,
)
from .response_serializers import ApiResponseSerializer, ResultErrorSerializer, envelope_of

__all__ = [
    # Envelope
    "ApiResponseSerializer",
    "ResultErrorSerializer",
    "envelope_of",
    # Categories
    "CategorySerializer",
    "CategoryDetailSerializer",
    # Products
    "DynamicFieldsField",
    "ProductFileSerializer",
    "ProductListSerializer",
    "ProductSerializer",
    "ProductCreateRequestSerializer",
    "ProductUpdateRequestSerializer",
    # AI
    "GeminiGenerateRequestSerializer",
    "GeminiGenerateResponseSerializer",
]
