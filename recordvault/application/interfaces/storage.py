"""Blob storage port. Implementation: LocalStorageService."""

from collections.abc import AsyncIterator
from typing import Any, BinaryIO, Protocol


class IStorageService(Protocol):
    """Protocol for blob storage backends keyed by a relative storage_ref."""

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Write file atomically and re-verify its checksum. Idempotent if same checksum."""
        ...

    def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content."""
        ...

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if not found."""
        ...

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""
        ...

    async def compute_checksum(self, storage_ref: str) -> str:
        """Re-hash the stored bytes. Raises StorageNotFoundError if absent."""
        ...

    def list_refs(self, prefix: str) -> AsyncIterator[str]:
        """Yield storage refs of content files under prefix (no sidecars or temp files)."""
        ...

    async def get_metadata(self, storage_ref: str) -> dict[str, Any]:
        """Return metadata without downloading."""
        ...
