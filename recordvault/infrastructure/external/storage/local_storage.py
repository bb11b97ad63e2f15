"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any, BinaryIO, cast

import aiofiles
import aiofiles.os

from recordvault.application.services.hash_service import HashService
from recordvault.core.constants import CHUNK_SIZE
from recordvault.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)
from recordvault.shared.utils.datetime import from_timestamp_utc, utc_now

META_SUFFIX = ".meta.json"
TEMP_PREFIX = ".tmp_"


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes go to a temp file in the
    target directory, are re-hashed, then renamed into place. Metadata is
    stored in a .meta.json sidecar next to the content file.
    """

    CHUNK_SIZE = CHUNK_SIZE

    def __init__(
        self, storage_root: str | Path, hasher: HashService | None = None
    ) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.hasher = hasher or HashService()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(storage_ref, "path_validation")
        return full_path

    @staticmethod
    def _meta_path(file_path: Path) -> Path:
        return file_path.with_name(file_path.name + META_SUFFIX)

    async def _compute_checksum(self, file_path: Path) -> str:
        """Digest of file under the pinned algorithm."""
        hasher = self.hasher.new_hasher()
        async with aiofiles.open(file_path, "rb") as f:
            while True:
                chunk = await f.read(self.CHUNK_SIZE)
                if not chunk:
                    break
                hasher.update(chunk)
        return hasher.hexdigest()

    async def _write_metadata(self, file_path: Path, metadata: dict[str, Any]) -> None:
        """Write JSON sidecar."""
        meta_path = self._meta_path(file_path)
        async with aiofiles.open(meta_path, "w") as f:
            await f.write(json.dumps(metadata, indent=2))
        os.chmod(meta_path, 0o640)

    async def _read_metadata(self, file_path: Path) -> dict[str, Any]:
        """Read JSON sidecar or empty dict."""
        meta_path = self._meta_path(file_path)
        if not meta_path.exists():
            return {}
        async with aiofiles.open(meta_path, "r") as f:
            content = await f.read()
        result = json.loads(content)
        return cast(dict[str, Any], result) if isinstance(result, dict) else {}

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Upload with atomic write and checksum validation. Idempotent if same checksum."""
        try:
            target_path = self._get_full_path(storage_ref)
            if target_path.exists():
                existing_checksum = await self._compute_checksum(target_path)
                if existing_checksum == expected_checksum:
                    existing_meta = await self._read_metadata(target_path)
                    return {
                        "storage_ref": storage_ref,
                        "checksum": existing_checksum,
                        "size": target_path.stat().st_size,
                        "uploaded_at": existing_meta.get(
                            "uploaded_at", utc_now().isoformat()
                        ),
                    }
                raise StorageAlreadyExistsError(storage_ref)

            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            if file_data.seekable():
                file_data.seek(0)

            temp_fd, temp_name = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=TEMP_PREFIX,
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            temp_path = Path(temp_name)
            try:
                file_size = 0
                async with aiofiles.open(temp_path, "wb") as f:
                    while True:
                        chunk = file_data.read(self.CHUNK_SIZE)
                        if not chunk:
                            break
                        file_size += len(chunk)
                        await f.write(chunk)
                os.chmod(temp_path, 0o640)
                computed = await self._compute_checksum(temp_path)
                if computed != expected_checksum:
                    raise StorageChecksumMismatchError(
                        storage_ref, expected_checksum, computed
                    )
                os.replace(temp_path, target_path)
                upload_meta: dict[str, Any] = {
                    "storage_ref": storage_ref,
                    "checksum": computed,
                    "size": file_size,
                    "content_type": content_type,
                    "uploaded_at": utc_now().isoformat(),
                    "custom": metadata or {},
                }
                await self._write_metadata(target_path, upload_meta)
                return {
                    "storage_ref": storage_ref,
                    "checksum": computed,
                    "size": file_size,
                    "uploaded_at": upload_meta["uploaded_at"],
                }
            finally:
                if temp_path.exists():
                    temp_path.unlink()
        except (
            StorageChecksumMismatchError,
            StorageAlreadyExistsError,
            StoragePermissionError,
        ):
            raise
        except Exception as e:
            raise StorageUploadError(storage_ref, str(e)) from e

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.exists():
            raise StorageNotFoundError(storage_ref)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                while True:
                    chunk = await f.read(self.CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
        except OSError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e

    async def delete(self, storage_ref: str) -> bool:
        """Delete file and metadata. Returns True if deleted, False if absent."""
        file_path = self._get_full_path(storage_ref)
        try:
            meta_path = self._meta_path(file_path)
            if meta_path.exists():
                await aiofiles.os.remove(meta_path)
            if not file_path.exists():
                return False
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e
        parent = file_path.parent
        while parent != self.storage_root:
            try:
                if any(parent.iterdir()):
                    break
                parent.rmdir()
            except OSError:
                break
            parent = parent.parent
        return True

    async def exists(self, storage_ref: str) -> bool:
        """Return True if the content file exists."""
        try:
            return self._get_full_path(storage_ref).is_file()
        except StoragePermissionError:
            return False

    async def compute_checksum(self, storage_ref: str) -> str:
        """Re-hash the stored bytes."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.is_file():
            raise StorageNotFoundError(storage_ref)
        try:
            return await self._compute_checksum(file_path)
        except OSError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e

    def _scan(self, prefix: str) -> list[str]:
        base = self._get_full_path(prefix)
        if not base.is_dir():
            return []
        refs = []
        for path in sorted(base.rglob("*")):
            name = path.name
            if not path.is_file() or name.endswith(META_SUFFIX) or name.startswith(TEMP_PREFIX):
                continue
            refs.append(path.relative_to(self.storage_root).as_posix())
        return refs

    async def list_refs(self, prefix: str) -> AsyncIterator[str]:
        """Yield storage refs of content files under prefix."""
        for ref in await asyncio.to_thread(self._scan, prefix):
            yield ref

    async def get_metadata(self, storage_ref: str) -> dict[str, Any]:
        """Return size, content_type, checksum, last_modified, custom."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.exists():
            raise StorageNotFoundError(storage_ref)
        stat = file_path.stat()
        stored = await self._read_metadata(file_path)
        return {
            "size": stat.st_size,
            "content_type": stored.get("content_type", "application/octet-stream"),
            "checksum": stored.get("checksum"),
            "last_modified": from_timestamp_utc(stat.st_mtime).isoformat(),
            "custom": stored.get("custom", {}),
        }
