import logging

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny

from infrastructure.container import get_container
from marketplace.api.responses import to_response
from marketplace.api.serializers import (
    ApiResponseSerializer,
    ProductCreateRequestSerializer,
    ProductListSerializer,
    ProductSerializer,
    ProductUpdateRequestSerializer,
    envelope_of,
)
from marketplace.services import ProductService, ResultError, ServiceResult
from marketplace.services.product_service import DEFAULT_PAGE_SIZE

from .base import request_language
from .category_views import LANGUAGE_PARAMETER

logger = logging.getLogger(__name__)


def _int_param(value, default: int):
    """Query integer, None when present but not a number."""
    if value in (None, ""):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@extend_schema_view(
    list=extend_schema(
        summary="List products",
        description="Published products, newest first. `take` is clamped to 1..100.",
        parameters=[
            LANGUAGE_PARAMETER,
            OpenApiParameter(name="categoryId", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="skip", type=int, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="take", type=int, location=OpenApiParameter.QUERY, required=False),
        ],
        responses={200: envelope_of(ProductListSerializer, "ProductListEnvelope", many=True)},
    ),
    retrieve=extend_schema(
        summary="Get product details",
        description="Retrieve a product by ObjectId. Each read increments the view counter in the background.",
        parameters=[LANGUAGE_PARAMETER],
        responses={200: envelope_of(ProductSerializer, "ProductEnvelope")},
    ),
    create=extend_schema(
        summary="Create product",
        description=(
            "Create a published product. Files that fail validation or storage are skipped; "
            "the product is created with the files that succeeded."
        ),
        request={"multipart/form-data": ProductCreateRequestSerializer},
        responses={200: envelope_of(ProductSerializer, "ProductCreateEnvelope")},
    ),
    partial_update=extend_schema(
        summary="Update product",
        description="Partially update title, description, price, dynamic fields, location or contact phone.",
        request=ProductUpdateRequestSerializer,
        responses={200: envelope_of(ProductSerializer, "ProductUpdateEnvelope")},
    ),
    destroy=extend_schema(
        summary="Delete product",
        description="Delete a product and its stored files. File deletion failures do not block the delete.",
        responses={200: ApiResponseSerializer},
    ),
)
class ProductViewSet(viewsets.ViewSet):
    """
    ViewSet for product listings using Service Layer
    """

    permission_classes = [AllowAny]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_service(self) -> ProductService:
        return get_container().product_service()

    def list(self, request):
        skip = _int_param(request.query_params.get("skip"), 0)
        take = _int_param(request.query_params.get("take"), DEFAULT_PAGE_SIZE)
        if skip is None or take is None:
            logger.warning(
                f"Rejected product list paging: skip={request.query_params.get('skip')!r} "
                f"take={request.query_params.get('take')!r}"
            )
            return to_response(ServiceResult.failure(ResultError.bad_request("skip and take must be integers")))

        result = self.get_service().list_products(
            category_id=request.query_params.get("categoryId") or None,
            language=request_language(request),
            skip=skip,
            take=take,
        )
        return to_response(result, ProductListSerializer, many=True)

    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk, request_language(request))
        return to_response(result, ProductSerializer)

    def create(self, request):
        serializer = ProductCreateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        data.pop("files", None)
        files = request.FILES.getlist("files")

        result = self.get_service().create_product(data, files, language=request_language(request))
        return to_response(result, ProductSerializer)

    def partial_update(self, request, pk=None):
        serializer = ProductUpdateRequestSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_product(pk, dict(serializer.validated_data), request_language(request))
        return to_response(result, ProductSerializer)

    def destroy(self, request, pk=None):
        result = self.get_service().delete_product(pk)
        if not result.ok:
            logger.warning(f"Product {pk} not deleted: {result.error_detail}")
        return to_response(result)
