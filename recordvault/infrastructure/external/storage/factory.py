"""Storage service factory: creates the blob storage backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recordvault.application.interfaces.storage import IStorageService

if TYPE_CHECKING:
    from recordvault.core.config import Settings


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(settings: "Settings | None" = None) -> IStorageService:
        """Create storage service from settings.

        Raises:
            ValueError: STORAGE_ROOT missing.
        """
        from recordvault.application.services.hash_service import HashService
        from recordvault.core.config import get_settings
        from recordvault.infrastructure.external.storage.local_storage import (
            LocalStorageService,
        )

        s = settings or get_settings()
        if not s.storage_root:
            raise ValueError("STORAGE_ROOT required for local storage")
        return LocalStorageService(storage_root=s.storage_root, hasher=HashService())
