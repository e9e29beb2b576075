from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api.views import CategoryViewSet, GeminiViewSet, ProductViewSet

# Create the main router
router = DefaultRouter()
router.register(r"categories", CategoryViewSet, basename="category")
router.register(r"products", ProductViewSet, basename="product")

app_name = "marketplace"

urlpatterns = [
    path("ai/gemini/", GeminiViewSet.as_view({"post": "generate"}), name="ai-gemini"),
    # Main API routes
    path("", include(router.urls)),
]
