"""
Storage Settings
================

File storage configuration consumed by the storage adapters.
Values come from the ``FILE_STORAGE`` dict in Django settings.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from django.conf import settings

BYTES_PER_MB = 1024 * 1024

DEFAULT_IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".webp", ".heic", ".heif", ".gif", ".bmp"]
DEFAULT_VIDEO_EXTENSIONS = [".mp4", ".mov", ".avi", ".webm", ".mkv", ".flv", ".wmv"]


def _normalize_extensions(extensions) -> List[str]:
    normalized = []
    for ext in extensions or []:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        normalized.append(ext)
    return normalized


@dataclass
class StorageSettings:
    """
    Upload storage configuration.

    Attributes:
        web_root: Directory that public URLs are relative to
        upload_path: Upload directory, relative to web_root (e.g. "uploads")
        max_image_size_mb: Maximum image size in binary megabytes
        max_video_size_mb: Maximum video size in binary megabytes
        allowed_image_extensions: Lowercase extensions with leading dot
        allowed_video_extensions: Lowercase extensions with leading dot
    """

    web_root: Path
    upload_path: str = "uploads"
    max_image_size_mb: int = 10
    max_video_size_mb: int = 100
    allowed_image_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS))
    allowed_video_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_VIDEO_EXTENSIONS))

    def __post_init__(self):
        self.web_root = Path(self.web_root)
        self.upload_path = self.upload_path.strip("/")
        self.allowed_image_extensions = _normalize_extensions(self.allowed_image_extensions)
        self.allowed_video_extensions = _normalize_extensions(self.allowed_video_extensions)

    @property
    def max_image_size_bytes(self) -> int:
        return self.max_image_size_mb * BYTES_PER_MB

    @property
    def max_video_size_bytes(self) -> int:
        return self.max_video_size_mb * BYTES_PER_MB

    @property
    def upload_root(self) -> Path:
        return self.web_root / self.upload_path

    @classmethod
    def from_django_settings(cls, overrides: Optional[dict] = None) -> "StorageSettings":
        config = dict(getattr(settings, "FILE_STORAGE", {}))
        config.update(overrides or {})
        return cls(
            web_root=config.get("WEB_ROOT", Path(settings.BASE_DIR) / "wwwroot"),
            upload_path=config.get("UPLOAD_PATH", "uploads"),
            max_image_size_mb=int(config.get("MAX_IMAGE_SIZE_MB", 10)),
            max_video_size_mb=int(config.get("MAX_VIDEO_SIZE_MB", 100)),
            allowed_image_extensions=config.get("ALLOWED_IMAGE_EXTENSIONS", DEFAULT_IMAGE_EXTENSIONS),
            allowed_video_extensions=config.get("ALLOWED_VIDEO_EXTENSIONS", DEFAULT_VIDEO_EXTENSIONS),
        )
