"""
Response Serializers for Marketplace API Documentation

These serializers define the envelope every endpoint answers with, for
OpenAPI schema generation. They are NOT used for data validation.
"""

from drf_spectacular.utils import inline_serializer
from rest_framework import serializers

from utils.service_base import ErrorKind


class ResultErrorSerializer(serializers.Serializer):
    """Error part of the envelope; kind "None" on success"""

    code = serializers.IntegerField(help_text="HTTP status of the error kind")
    message = serializers.CharField(help_text="Human-readable message")
    kind = serializers.ChoiceField(choices=[k.value for k in ErrorKind], help_text="Error classification")


class ApiResponseSerializer(serializers.Serializer):
    """Standard response envelope"""

    isSuccess = serializers.BooleanField(help_text="Whether the operation succeeded")
    error = ResultErrorSerializer()
    data = serializers.JSONField(allow_null=True, help_text="Operation payload, null on failure")


def envelope_of(serializer, name: str, many: bool = False):
    """Envelope schema whose ``data`` is the given serializer."""
    return inline_serializer(
        name=name,
        fields={
            "isSuccess": serializers.BooleanField(),
            "error": ResultErrorSerializer(),
            "data": serializer(many=many, allow_null=True),
        },
    )
