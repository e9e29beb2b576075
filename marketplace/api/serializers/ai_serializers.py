from rest_framework import serializers


class GeminiGenerateRequestSerializer(serializers.Serializer):
    """Multipart body for the listing assistant"""

    clientPrompt = serializers.CharField(
        source="client_prompt", required=False, allow_blank=True, default="", help_text="Free-form user text"
    )
    files = serializers.ListField(
        child=serializers.FileField(), required=False, write_only=True, help_text="Photos and videos of the item"
    )


class GeminiGenerateResponseSerializer(serializers.Serializer):
    rawResponse = serializers.CharField(source="raw_response", help_text="Model JSON answer, verbatim")
