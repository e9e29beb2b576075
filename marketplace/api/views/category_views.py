from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny

from infrastructure.container import get_container
from marketplace.api.responses import to_response
from marketplace.api.serializers import CategoryDetailSerializer, CategorySerializer, envelope_of
from marketplace.services import CategoryService

from .base import request_language

LANGUAGE_PARAMETER = OpenApiParameter(
    name="lang", type=str, location=OpenApiParameter.QUERY, required=False, description="ru, tj or en (default ru)"
)


@extend_schema_view(
    list=extend_schema(
        summary="List all categories",
        description="Retrieve active categories ordered by display order, in the request language.",
        parameters=[LANGUAGE_PARAMETER],
        responses={200: envelope_of(CategorySerializer, "CategoryListEnvelope", many=True)},
    ),
    retrieve=extend_schema(
        summary="Get category by ID",
        description="Retrieve an active category by its ObjectId.",
        parameters=[LANGUAGE_PARAMETER],
        responses={200: envelope_of(CategorySerializer, "CategoryEnvelope")},
    ),
)
class CategoryViewSet(viewsets.ViewSet):
    """
    ViewSet for categories - read-only operations using Service Layer
    """

    permission_classes = [AllowAny]

    def get_service(self) -> CategoryService:
        return get_container().category_service()

    def list(self, request):
        result = self.get_service().list_categories(request_language(request))
        return to_response(result, CategorySerializer, many=True)

    def retrieve(self, request, pk=None):
        result = self.get_service().get_by_id(pk, request_language(request))
        return to_response(result, CategorySerializer)

    @extend_schema(
        summary="Get category by slug",
        description="Retrieve an active category by its slug (case-insensitive).",
        parameters=[LANGUAGE_PARAMETER],
        responses={200: envelope_of(CategorySerializer, "CategorySlugEnvelope")},
    )
    @action(detail=False, methods=["get"], url_path=r"slug/(?P<slug>[^/.]+)")
    def by_slug(self, request, slug=None):
        result = self.get_service().get_by_slug(slug, request_language(request))
        return to_response(result, CategorySerializer)

    @extend_schema(
        summary="Get category details",
        description="Retrieve every language variant of a category, including inactive ones.",
        responses={200: envelope_of(CategoryDetailSerializer, "CategoryDetailEnvelope")},
    )
    @action(detail=True, methods=["get"])
    def details(self, request, pk=None):
        result = self.get_service().get_detail(pk)
        return to_response(result, CategoryDetailSerializer)
