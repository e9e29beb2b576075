import logging

from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny

from infrastructure.container import get_container
from marketplace.api.responses import to_response
from marketplace.api.serializers import (
    GeminiGenerateRequestSerializer,
    GeminiGenerateResponseSerializer,
    envelope_of,
)
from marketplace.services import GeminiService

from .base import request_language

logger = logging.getLogger(__name__)


class GeminiViewSet(viewsets.ViewSet):
    """
    Listing assistant backed by Gemini
    """

    permission_classes = [AllowAny]
    parser_classes = [MultiPartParser, FormParser]

    def get_service(self) -> GeminiService:
        return get_container().gemini_service()

    @extend_schema(
        summary="Generate via Gemini",
        description="Sends prompt and optional files to Gemini. Returns raw JSON response.",
        request={"multipart/form-data": GeminiGenerateRequestSerializer},
        responses={
            200: envelope_of(GeminiGenerateResponseSerializer, "GeminiGenerateEnvelope"),
            415: None,
        },
        tags=["AI"],
    )
    def generate(self, request):
        serializer = GeminiGenerateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().generate(
            serializer.validated_data.get("client_prompt", ""),
            request.FILES.getlist("files"),
            request_language(request),
        )
        if not result.ok:
            logger.warning(f"Gemini generation rejected: {result.error_detail}")
        return to_response(result, GeminiGenerateResponseSerializer)
