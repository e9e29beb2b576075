from rest_framework import serializers


class CategorySerializer(serializers.Serializer):
    """Category resolved to the request language"""

    id = serializers.CharField()
    slug = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    icon = serializers.CharField(allow_null=True)
    displayOrder = serializers.IntegerField(source="display_order")
    isActive = serializers.BooleanField(source="is_active")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class CategoryDetailSerializer(serializers.Serializer):
    """Category with every language variant"""

    id = serializers.CharField()
    slug = serializers.CharField()
    nameRu = serializers.CharField(source="name_ru")
    nameTj = serializers.CharField(source="name_tj")
    nameEn = serializers.CharField(source="name_en")
    descriptionRu = serializers.CharField(source="description_ru", allow_null=True)
    descriptionTj = serializers.CharField(source="description_tj", allow_null=True)
    descriptionEn = serializers.CharField(source="description_en", allow_null=True)
    icon = serializers.CharField(allow_null=True)
    displayOrder = serializers.IntegerField(source="display_order")
    isActive = serializers.BooleanField(source="is_active")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
