"""
Local File Storage Adapter
==========================

Concrete implementation of StorageInterface writing uploads to the local
filesystem, under ``<web_root>/<upload_path>/<images|videos>/``.

Stored files are addressed by their path relative to the web root, which
is also their public URL without the leading slash. Every path coming from
a caller is resolved and must stay inside the upload root.
"""

import logging
import os
import shutil
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from utils.service_base import ResultError, ServiceResult

from .config import StorageSettings
from .interface import FileUploadOutcome, MediaKind, StorageException, StorageInterface, StoredFile

logger = logging.getLogger(__name__)

OCTET_STREAM = "application/octet-stream"

CONTENT_TYPES = {
    # Images
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    # Videos
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    ".webm": "video/webm",
    ".mkv": "video/x-matroska",
    ".flv": "video/x-flv",
    ".wmv": "video/x-ms-wmv",
}


def content_type_for(path) -> str:
    """Get MIME content type based on file extension."""
    return CONTENT_TYPES.get(Path(str(path)).suffix.lower(), OCTET_STREAM)


def resolve_mime_type(file) -> str:
    """Uploaded content type, or the extension's type when absent/octet-stream."""
    content_type = (getattr(file, "content_type", None) or "").strip()
    if content_type and content_type.lower() != OCTET_STREAM:
        return content_type
    return content_type_for(getattr(file, "name", "") or "")


def _extension(file_name: str) -> str:
    return Path(file_name or "").suffix.lower()


class LocalFileStorage(StorageInterface):
    """
    Filesystem storage for product media.

    Configuration (FILE_STORAGE in settings.py):
        WEB_ROOT: Directory public URLs are relative to
        UPLOAD_PATH: Upload directory under WEB_ROOT (default "uploads")
        MAX_IMAGE_SIZE_MB / MAX_VIDEO_SIZE_MB: Size limits
        ALLOWED_IMAGE_EXTENSIONS / ALLOWED_VIDEO_EXTENSIONS: Allow-lists
    """

    def __init__(self, storage_settings: StorageSettings):
        """
        Initialize storage and ensure the upload directories exist.

        Raises:
            StorageException: If the directories cannot be created
        """
        self.settings = storage_settings
        self._ensure_directories()

    def _ensure_directories(self):
        for kind in MediaKind:
            directory = self.settings.upload_root / kind.subdirectory
            try:
                if not directory.is_dir():
                    directory.mkdir(parents=True, exist_ok=True)
                    logger.info(f"Created {kind.subdirectory} directory: {directory}")
            except OSError as e:
                logger.error(f"Failed to create upload directory {directory}: {e}", exc_info=True)
                raise StorageException(f"Cannot create upload directory {directory}: {e}") from e

    # ----------------------------------------------------------------- validation

    def validate(self, file, media_kind: MediaKind) -> ServiceResult[bool]:
        """
        Validate uploaded file with kind-specific size limits and extensions.

        Returns:
            success(True), or BadRequest (empty / too large) or
            UnsupportedMediaType (extension not allowed)
        """
        size = getattr(file, "size", 0) if file is not None else 0
        if not size:
            return ServiceResult.failure(ResultError.bad_request("File is empty"))

        if media_kind is MediaKind.IMAGE:
            max_bytes = self.settings.max_image_size_bytes
            max_mb = self.settings.max_image_size_mb
            allowed = self.settings.allowed_image_extensions
        else:
            max_bytes = self.settings.max_video_size_bytes
            max_mb = self.settings.max_video_size_mb
            allowed = self.settings.allowed_video_extensions

        if size > max_bytes:
            actual_mb = size / 1024 / 1024
            return ServiceResult.failure(
                ResultError.bad_request(
                    f"{media_kind.label} size ({actual_mb:.2f} MB) exceeds maximum allowed size of {max_mb} MB"
                )
            )

        extension = _extension(file.name)
        if extension not in allowed:
            return ServiceResult.failure(
                ResultError.unsupported_media_type(
                    f"File type '{extension}' is not allowed for {media_kind.value}. "
                    f"Allowed: {', '.join(allowed)}"
                )
            )

        return ServiceResult.success(True)

    def detect_media_kind(self, file_name: str) -> Optional[MediaKind]:
        extension = _extension(file_name)
        if extension in self.settings.allowed_image_extensions:
            return MediaKind.IMAGE
        if extension in self.settings.allowed_video_extensions:
            return MediaKind.VIDEO
        return None

    # ----------------------------------------------------------------- writes

    def store(self, file, media_kind: MediaKind) -> ServiceResult[FileUploadOutcome]:
        """
        Write file content under a unique name.

        The content is streamed to a ``.part`` file which is renamed once
        complete, so a failed write never leaves a file at the final path.
        """
        stored_name = f"{uuid.uuid4()}{_extension(file.name)}"
        target = self.settings.upload_root / media_kind.subdirectory / stored_name
        partial = target.with_name(f"{stored_name}.part")
        relative_path = f"{self.settings.upload_path}/{media_kind.subdirectory}/{stored_name}"

        try:
            with open(partial, "wb") as destination:
                if hasattr(file, "chunks"):
                    for chunk in file.chunks():
                        destination.write(chunk)
                else:
                    shutil.copyfileobj(file, destination)
            os.replace(partial, target)
            size = target.stat().st_size
        except OSError as e:
            logger.error(f"Failed to save file {relative_path}: {e}", exc_info=True)
            try:
                partial.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove partial file {partial}: {cleanup_error}")
            return ServiceResult.failure(ResultError.internal_server_error("Failed to save file to disk"))

        logger.info(f"File saved: {relative_path}, Size: {size / 1024:.2f} KB")

        return ServiceResult.success(
            FileUploadOutcome(
                stored_name=stored_name,
                relative_path=relative_path,
                public_url=f"/{relative_path}",
                size_bytes=size,
                mime_type=resolve_mime_type(file),
                media_kind=media_kind,
                uploaded_at=datetime.now(timezone.utc),
            )
        )

    def upload(self, file) -> ServiceResult[FileUploadOutcome]:
        """Upload a file, auto-detecting image or video from its extension."""
        file_name = getattr(file, "name", "") if file is not None else ""
        try:
            media_kind = self.detect_media_kind(file_name)
            if media_kind is None:
                extension = _extension(file_name)
                logger.warning(f"Unsupported file type: {extension} ({file_name})")
                return ServiceResult.failure(ResultError.unsupported_media_type(f"Unsupported file type: {extension}"))

            if media_kind is MediaKind.IMAGE:
                result = self.upload_image(file)
            else:
                result = self.upload_video(file)

            if result.ok:
                logger.info(f"{media_kind.label} uploaded successfully: {result.value.stored_name}")
            else:
                logger.warning(f"Upload of '{file_name}' rejected: {result.error_detail}")
            return result

        except Exception as e:
            logger.error(f"Unexpected error uploading '{file_name}': {e}", exc_info=True)
            return ServiceResult.failure(ResultError.internal_server_error("Failed to upload file"))

    # ----------------------------------------------------------------- lookups

    def _resolve(self, relative_path: str) -> Optional[Path]:
        """Absolute path for a relative path, None when it escapes the upload root or cannot be resolved."""
        try:
            root = self.settings.upload_root.resolve()
            candidate = (self.settings.web_root / relative_path.strip().lstrip("/\\")).resolve()
        except (ValueError, OSError) as e:
            logger.warning(f"Unresolvable file path {relative_path!r}: {e}")
            return None
        if candidate == root or not candidate.is_relative_to(root):
            return None
        return candidate

    def delete(self, relative_path: str) -> ServiceResult[bool]:
        if not relative_path or not relative_path.strip():
            logger.warning("File path is null or empty")
            return ServiceResult.failure(ResultError.bad_request("File path cannot be empty"), value=False)

        full_path = self._resolve(relative_path)
        if full_path is None:
            logger.warning(f"Rejected invalid file path: {relative_path!r}")
            return ServiceResult.failure(ResultError.bad_request("Invalid file path"), value=False)

        try:
            if not full_path.is_file():
                logger.warning(f"File not found: {full_path}")
                return ServiceResult.failure(ResultError.not_found(f"File not found: {relative_path}"), value=False)

            full_path.unlink()

        except PermissionError as e:
            logger.error(f"Access denied deleting {relative_path}: {e}")
            return ServiceResult.failure(ResultError.access_denied("Access denied to delete file"), value=False)
        except OSError as e:
            logger.error(f"IO error deleting {relative_path}: {e}")
            return ServiceResult.failure(ResultError.internal_server_error("File is in use or locked"), value=False)

        logger.info(f"File deleted successfully: {relative_path}")
        return ServiceResult.success(True)

    def exists(self, relative_path: str) -> ServiceResult[bool]:
        if not relative_path or not relative_path.strip():
            logger.warning("File path is null or empty")
            return ServiceResult.success(False)

        full_path = self._resolve(relative_path)
        if full_path is None:
            logger.warning(f"Rejected invalid file path: {relative_path!r}")
            return ServiceResult.success(False)

        try:
            exists = full_path.is_file()
        except OSError as e:
            logger.error(f"Failed to check file existence for {relative_path}: {e}", exc_info=True)
            return ServiceResult.failure(ResultError.internal_server_error("Failed to check file existence"))

        logger.debug(f"File exists check: {relative_path} = {exists}")
        return ServiceResult.success(exists)

    def get_file(self, relative_path: str) -> ServiceResult[StoredFile]:
        if not relative_path or not relative_path.strip():
            logger.warning("File path is null or empty")
            return ServiceResult.failure(ResultError.bad_request("File path cannot be empty"))

        full_path = self._resolve(relative_path)
        if full_path is None:
            logger.warning(f"Rejected invalid file path: {relative_path!r}")
            return ServiceResult.failure(ResultError.bad_request("Invalid file path"))

        try:
            if not full_path.is_file():
                logger.warning(f"File not found: {full_path}")
                return ServiceResult.failure(ResultError.not_found(f"File not found: {relative_path}"))

            if not os.access(full_path, os.R_OK):
                return ServiceResult.failure(ResultError.access_denied("Access denied to read file"))

            size = full_path.stat().st_size

        except PermissionError as e:
            logger.error(f"Access denied reading {relative_path}: {e}")
            return ServiceResult.failure(ResultError.access_denied("Access denied to read file"))
        except OSError as e:
            logger.error(f"IO error reading {relative_path}: {e}")
            return ServiceResult.failure(ResultError.internal_server_error("Failed to read file"))

        logger.debug(f"File retrieved: {full_path.name}, Size: {size / 1024:.2f} KB")

        return ServiceResult.success(
            StoredFile(
                absolute_path=full_path,
                file_name=full_path.name,
                content_type=content_type_for(full_path),
                size_bytes=size,
            )
        )
