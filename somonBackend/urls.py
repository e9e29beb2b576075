"""
URL configuration for somonBackend project.
"""

from django.conf import settings
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from marketplace.api.views import UploadedFileView

UPLOAD_PREFIX = str(settings.FILE_STORAGE.get("UPLOAD_PATH", "uploads")).strip("/")

urlpatterns = [
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # API endpoints
    path("api/", include("marketplace.urls")),
    # Public URLs of uploaded media
    path(f"{UPLOAD_PREFIX}/<path:file_path>", UploadedFileView.as_view(), name="uploaded-file"),
]
