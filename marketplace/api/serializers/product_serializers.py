import json
from decimal import Decimal

from rest_framework import serializers

PRICE_MAX_DIGITS = 18
PRICE_DECIMAL_PLACES = 2


class DynamicFieldsField(serializers.Field):
    """
    String-to-string map that also accepts a JSON string, as sent in
    multipart form data.
    """

    default_error_messages = {
        "invalid": "Expected a JSON object of string values.",
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            if not data.strip():
                return {}
            try:
                data = json.loads(data)
            except (json.JSONDecodeError, ValueError):
                self.fail("invalid")
        if data is None:
            return {}
        if not isinstance(data, dict):
            self.fail("invalid")
        return {str(key): "" if value is None else str(value) for key, value in data.items()}

    def to_representation(self, value):
        return value if value is not None else {}


class ProductFileSerializer(serializers.Serializer):
    fileName = serializers.CharField(source="file_name")
    filePath = serializers.CharField(source="file_path")
    fileUrl = serializers.CharField(source="file_url")
    fileSizeBytes = serializers.IntegerField(source="file_size_bytes")
    mimeType = serializers.CharField(source="mime_type")
    fileType = serializers.CharField(source="media_kind.value")
    displayOrder = serializers.IntegerField(source="display_order")
    uploadedAt = serializers.DateTimeField(source="uploaded_at")


class ProductListSerializer(serializers.Serializer):
    """Product card: essentials plus the first image as thumbnail"""

    id = serializers.CharField()
    title = serializers.CharField()
    price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES, coerce_to_string=False
    )
    status = serializers.IntegerField()
    thumbnailUrl = serializers.CharField(source="thumbnail_url", allow_null=True)
    location = serializers.CharField(allow_null=True)
    viewCount = serializers.IntegerField(source="view_count")
    createdAt = serializers.DateTimeField(source="created_at")
    publishedAt = serializers.DateTimeField(source="published_at", allow_null=True)


class ProductSerializer(serializers.Serializer):
    """Full product with files and localized category name"""

    id = serializers.CharField()
    categoryId = serializers.CharField(source="category_id")
    categoryName = serializers.CharField(source="category_name", allow_null=True)
    title = serializers.CharField()
    description = serializers.CharField()
    price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES, coerce_to_string=False
    )
    status = serializers.IntegerField()
    files = ProductFileSerializer(many=True)
    dynamicFields = DynamicFieldsField(source="dynamic_fields")
    location = serializers.CharField(allow_null=True)
    contactPhone = serializers.CharField(source="contact_phone", allow_null=True)
    viewCount = serializers.IntegerField(source="view_count")
    isAiGenerated = serializers.BooleanField(source="is_ai_generated")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    publishedAt = serializers.DateTimeField(source="published_at", allow_null=True)


class ProductCreateRequestSerializer(serializers.Serializer):
    """Multipart body for creating a product; repeat ``files`` for each upload"""

    categoryId = serializers.CharField(source="category_id", help_text="Category ObjectId")
    title = serializers.CharField(max_length=200, help_text="Listing title")
    description = serializers.CharField(required=False, allow_blank=True, default="")
    price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES, min_value=Decimal("0"), help_text="Price"
    )
    dynamicFields = DynamicFieldsField(
        source="dynamic_fields", required=False, help_text="Category specific attributes as a JSON object"
    )
    location = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=200)
    contactPhone = serializers.CharField(
        source="contact_phone", required=False, allow_blank=True, allow_null=True, max_length=50
    )
    isAiGenerated = serializers.BooleanField(source="is_ai_generated", required=False, default=False)
    files = serializers.ListField(
        child=serializers.FileField(), required=False, write_only=True, help_text="Images and videos"
    )


class ProductUpdateRequestSerializer(serializers.Serializer):
    """Partial update; omitted fields are left unchanged"""

    title = serializers.CharField(required=False, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES, min_value=Decimal("0"), required=False
    )
    dynamicFields = DynamicFieldsField(source="dynamic_fields", required=False)
    location = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=200)
    contactPhone = serializers.CharField(
        source="contact_phone", required=False, allow_blank=True, allow_null=True, max_length=50
    )
