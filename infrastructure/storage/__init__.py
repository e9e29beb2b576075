"""
Storage Abstraction Layer
==========================

Provides a unified interface for uploaded media (images and videos).
"""

from .config import BYTES_PER_MB, StorageSettings
from .factory import StorageFactory
from .interface import (
    DeleteAttempt,
    FileUploadOutcome,
    MediaKind,
    StorageException,
    StorageInterface,
    StoredFile,
    UploadAttempt,
)
from .local_adapter import LocalFileStorage, content_type_for, resolve_mime_type

__all__ = [
    "BYTES_PER_MB",
    "StorageSettings",
    "StorageInterface",
    "StorageException",
    "MediaKind",
    "FileUploadOutcome",
    "StoredFile",
    "UploadAttempt",
    "DeleteAttempt",
    "LocalFileStorage",
    "StorageFactory",
    "content_type_for",
    "resolve_mime_type",
]
