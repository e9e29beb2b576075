"""
Storage Interface
=================

Abstract base class defining the contract for uploaded media storage.
Every operation returns a ServiceResult; only startup (directory bootstrap)
is allowed to raise.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional

from utils.service_base import ServiceResult


class MediaKind(Enum):
    """Classification of an uploaded file, driving size/extension policy."""

    IMAGE = "image"
    VIDEO = "video"

    @property
    def subdirectory(self) -> str:
        return "images" if self is MediaKind.IMAGE else "videos"

    @property
    def label(self) -> str:
        return "Image" if self is MediaKind.IMAGE else "Video"


@dataclass(frozen=True)
class FileUploadOutcome:
    """
    A successfully stored upload.

    Attributes:
        stored_name: Generated file name (uuid + original extension)
        relative_path: Path relative to the web root ("uploads/images/<uuid>.jpg")
        public_url: "/" + relative_path
        size_bytes: File size in bytes
        mime_type: MIME type of the content
        media_kind: Image or video
        uploaded_at: UTC timestamp of the write
    """

    stored_name: str
    relative_path: str
    public_url: str
    size_bytes: int
    mime_type: str
    media_kind: MediaKind
    uploaded_at: datetime


@dataclass(frozen=True)
class StoredFile:
    """A stored file resolved for download."""

    absolute_path: Path
    file_name: str
    content_type: str
    size_bytes: int

    def open(self) -> BinaryIO:
        return open(self.absolute_path, "rb")


@dataclass(frozen=True)
class UploadAttempt:
    """Per-file outcome of a best-effort batch upload."""

    original_name: str
    result: ServiceResult[FileUploadOutcome]


@dataclass(frozen=True)
class DeleteAttempt:
    """Per-file outcome of a best-effort batch delete."""

    relative_path: str
    result: ServiceResult[bool]


class StorageInterface(ABC):
    """
    Abstract interface for uploaded media storage.

    Concrete implementations:
        - LocalFileStorage: local filesystem under the configured web root
    """

    @abstractmethod
    def validate(self, file, media_kind: MediaKind) -> ServiceResult[bool]:
        """Check presence, size and extension of a file for the given media kind."""
        pass

    @abstractmethod
    def detect_media_kind(self, file_name: str) -> Optional[MediaKind]:
        """Classify a file name by extension, None when neither allow-list matches."""
        pass

    @abstractmethod
    def store(self, file, media_kind: MediaKind) -> ServiceResult[FileUploadOutcome]:
        """Write an already validated file under the media kind's subdirectory."""
        pass

    @abstractmethod
    def upload(self, file) -> ServiceResult[FileUploadOutcome]:
        """Detect the media kind, validate and store."""
        pass

    @abstractmethod
    def delete(self, relative_path: str) -> ServiceResult[bool]:
        """Delete a stored file by its relative path."""
        pass

    @abstractmethod
    def exists(self, relative_path: str) -> ServiceResult[bool]:
        """Check whether a stored file exists; missing is success(False)."""
        pass

    @abstractmethod
    def get_file(self, relative_path: str) -> ServiceResult[StoredFile]:
        """Resolve a stored file for download."""
        pass

    def upload_image(self, file) -> ServiceResult[FileUploadOutcome]:
        validation = self.validate(file, MediaKind.IMAGE)
        if not validation.ok:
            return ServiceResult.failure(validation.error)
        return self.store(file, MediaKind.IMAGE)

    def upload_video(self, file) -> ServiceResult[FileUploadOutcome]:
        validation = self.validate(file, MediaKind.VIDEO)
        if not validation.ok:
            return ServiceResult.failure(validation.error)
        return self.store(file, MediaKind.VIDEO)

    def upload_many(self, files: Iterable) -> List[UploadAttempt]:
        """Upload each file independently; one attempt per input, never raises."""
        return [UploadAttempt(original_name=getattr(f, "name", "") or "", result=self.upload(f)) for f in files]

    def delete_many(self, relative_paths: Iterable[str]) -> List[DeleteAttempt]:
        """Delete each path independently; one attempt per input, never raises."""
        return [DeleteAttempt(relative_path=path, result=self.delete(path)) for path in relative_paths]


class StorageException(Exception):
    """Base exception for storage operations."""

    pass
