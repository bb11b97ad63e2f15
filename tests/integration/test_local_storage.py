"""Tests for LocalStorageService (atomic writes, path validation, listing)."""

import hashlib
import io

import pytest

from recordvault.application.services.hash_service import HashService, SHA256Algorithm
from recordvault.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageNotFoundError,
    StoragePermissionError,
)
from recordvault.infrastructure.external.storage import LocalStorageService

DATA = b"scanned page"
DIGEST = hashlib.sha256(DATA).hexdigest()
REF = "records/rec1/abc.pdf"


class _CountingSHA256(SHA256Algorithm):
    def __init__(self) -> None:
        self.created = 0

    def new(self):
        self.created += 1
        return super().new()


async def _upload(storage: LocalStorageService, ref: str = REF, data: bytes = DATA):
    return await storage.upload(
        io.BytesIO(data), ref, hashlib.sha256(data).hexdigest(), "application/pdf"
    )


class TestUpload:
    async def test_upload_then_download(self, storage) -> None:
        result = await _upload(storage)
        assert result["checksum"] == DIGEST
        assert result["size"] == len(DATA)
        body = b"".join([chunk async for chunk in storage.download(REF)])
        assert body == DATA

    async def test_same_content_is_idempotent(self, storage) -> None:
        await _upload(storage)
        again = await _upload(storage)
        assert again["checksum"] == DIGEST

    async def test_different_content_at_same_ref_refused(self, storage) -> None:
        await _upload(storage)
        with pytest.raises(StorageAlreadyExistsError):
            await _upload(storage, data=b"other")

    async def test_checksum_mismatch_leaves_nothing(self, storage) -> None:
        with pytest.raises(StorageChecksumMismatchError):
            await storage.upload(io.BytesIO(DATA), REF, "0" * 64, "application/pdf")
        assert not await storage.exists(REF)
        assert [ref async for ref in storage.list_refs("records")] == []

    @pytest.mark.parametrize("ref", ["../escape.pdf", "records/../../escape.pdf", "."])
    async def test_path_traversal_refused(self, storage, ref: str) -> None:
        with pytest.raises(StoragePermissionError):
            await _upload(storage, ref=ref)


class TestReadAndDelete:
    async def test_metadata(self, storage) -> None:
        await _upload(storage)
        meta = await storage.get_metadata(REF)
        assert meta["size"] == len(DATA)
        assert meta["content_type"] == "application/pdf"
        assert meta["checksum"] == DIGEST

    async def test_compute_checksum(self, storage) -> None:
        await _upload(storage)
        assert await storage.compute_checksum(REF) == DIGEST

    async def test_checksums_use_injected_hasher(self, tmp_path) -> None:
        algorithm = _CountingSHA256()
        storage = LocalStorageService(tmp_path / "store", hasher=HashService(algorithm))
        await _upload(storage)
        after_upload = algorithm.created
        assert after_upload >= 1

        assert await storage.compute_checksum(REF) == DIGEST
        assert algorithm.created == after_upload + 1

    async def test_compute_checksum_missing(self, storage) -> None:
        with pytest.raises(StorageNotFoundError):
            await storage.compute_checksum(REF)

    async def test_download_missing(self, storage) -> None:
        with pytest.raises(StorageNotFoundError):
            async for _ in storage.download(REF):
                pass

    async def test_delete_removes_file_sidecar_and_empty_dirs(self, storage) -> None:
        await _upload(storage)
        assert await storage.delete(REF)
        assert not await storage.exists(REF)
        assert not (storage.storage_root / "records" / "rec1").exists()

    async def test_delete_missing_returns_false(self, storage) -> None:
        assert not await storage.delete(REF)

    async def test_list_refs_skips_sidecars(self, storage) -> None:
        await _upload(storage)
        await _upload(storage, ref="records/rec2/def.png", data=b"png")
        refs = [ref async for ref in storage.list_refs("records")]
        assert refs == ["records/rec1/abc.pdf", "records/rec2/def.png"]
