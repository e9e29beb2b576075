import logging

from django.http import FileResponse
from drf_spectacular.utils import OpenApiTypes, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from infrastructure.container import get_container
from marketplace.api.responses import to_response

logger = logging.getLogger(__name__)


class UploadedFileView(APIView):
    """
    Serves stored uploads at their public URL (``/<upload_path>/<path>``).
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Download uploaded file",
        description="Stream a stored image or video by its public path.",
        responses={(200, "application/octet-stream"): OpenApiTypes.BINARY},
    )
    def get(self, request, file_path: str):
        storage = get_container().storage()
        relative_path = f"{get_container().storage_settings().upload_path}/{file_path}"

        result = storage.get_file(relative_path)
        if not result.ok:
            logger.warning(f"Uploaded file not served: {relative_path!r} ({result.error_detail})")
            return to_response(result)

        stored = result.value
        response = FileResponse(stored.open(), content_type=stored.content_type)
        response["Content-Length"] = str(stored.size_bytes)
        return response
