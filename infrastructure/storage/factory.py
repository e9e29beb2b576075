"""
Storage Factory
===============

Factory for creating the upload storage backend from settings.
Implements the Dependency Inversion Principle.
"""

import logging
from typing import Optional

from .config import StorageSettings
from .interface import StorageInterface
from .local_adapter import LocalFileStorage

logger = logging.getLogger(__name__)


class StorageFactory:
    """
    Factory for creating the upload storage backend.

    Usage:
        storage = StorageFactory.create()
        storage = StorageFactory.create(StorageSettings(web_root=tmp_path))
    """

    @staticmethod
    def create(storage_settings: Optional[StorageSettings] = None) -> StorageInterface:
        """
        Create a storage backend instance.

        Args:
            storage_settings: Explicit settings; read from FILE_STORAGE when omitted

        Returns:
            LocalFileStorage rooted at the configured web root
        """
        storage_settings = storage_settings or StorageSettings.from_django_settings()
        logger.info(f"Creating local file storage at {storage_settings.upload_root}")
        return LocalFileStorage(storage_settings)
