"""Integration tests for the content store against SQLite and local storage."""

import io
import logging
from datetime import UTC, datetime, timedelta

import pytest

from recordvault.application.dtos.document import UploadCandidate
from recordvault.application.services import HashService
from recordvault.application.services.hash_service import SHA256Algorithm
from recordvault.application.use_cases.documents import (
    ContentStore,
    DocumentDeletionService,
    DocumentQueryService,
    DocumentUploadService,
)
from recordvault.application.use_cases.records import MedicalRecordService
from recordvault.domain.exceptions import (
    DuplicateDocumentException,
    MissingBlobException,
    ResourceNotFoundException,
    ValidationException,
)
from recordvault.infrastructure.external.storage import LocalStorageService
from recordvault.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from recordvault.infrastructure.persistence.repositories.medical_record_repo import (
    MedicalRecordRepository,
)
from recordvault.shared.utils.datetime import utc_now

ALLOWED = frozenset({"application/pdf", "image/png"})
PDF = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\n%%EOF\n"


def _candidate(data: bytes = PDF, name: str = "scan.pdf", **overrides) -> UploadCandidate:
    fields = {
        "original_filename": name,
        "mime_type": "application/pdf",
        "stream": io.BytesIO(data),
        "size": len(data),
    }
    fields.update(overrides)
    return UploadCandidate(**fields)


@pytest.fixture
def records(uow_factory, content_store, audit) -> MedicalRecordService:
    return MedicalRecordService(uow_factory, content_store, audit)


@pytest.fixture
def uploads(uow_factory, content_store, audit) -> DocumentUploadService:
    return DocumentUploadService(
        content_store=content_store,
        uow_factory=uow_factory,
        audit=audit,
        allowed_mime_types=ALLOWED,
        max_upload_size=1024 * 1024,
    )


@pytest.fixture
def queries(uow_factory, content_store, audit) -> DocumentQueryService:
    return DocumentQueryService(content_store, uow_factory, audit)


async def _stored_refs(storage) -> list[str]:
    return [ref async for ref in storage.list_refs("records")]


class TestStore:
    async def test_upload_stores_file_and_row(self, records, uploads, storage) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate(uploaded_by="clerk"))

        assert document.digest == HashService().hash_bytes(PDF)
        assert document.file_size == len(PDF)
        assert document.original_filename == "scan.pdf"
        assert document.stored_filename != "scan.pdf"
        assert document.stored_filename.endswith(".pdf")
        assert document.storage_ref == f"records/{record.id}/{document.stored_filename}"
        assert await _stored_refs(storage) == [document.storage_ref]

    async def test_upload_stamps_activity_and_expiry(self, records, uploads) -> None:
        record = await records.create(
            "p1", "clerk", last_activity_date=datetime(2001, 1, 1, tzinfo=UTC)
        )
        before = utc_now()

        await uploads.upload(record.id, _candidate())

        updated = await records.get(record.id, "clerk")
        assert updated.last_activity_date >= before - timedelta(seconds=1)
        expiry = updated.retention_expiry_date
        assert expiry.year == updated.last_activity_date.year + 20
        assert updated.document_count == 1

    async def test_activity_stamp_failure_keeps_upload(
        self, records, uploads, uow_factory, caplog, monkeypatch
    ) -> None:
        record = await records.create("p1", "clerk")

        async def broken_touch(self, *args, **kwargs):
            raise OSError("database connection lost")

        monkeypatch.setattr(MedicalRecordRepository, "touch_activity", broken_touch)
        with caplog.at_level(logging.WARNING):
            document = await uploads.upload(record.id, _candidate(uploaded_by="clerk"))

        assert "Could not update activity date" in caplog.text
        async with uow_factory() as uow:
            assert await uow.documents.get_by_id(document.id) is not None
            entries = await uow.audit_log.list(entity_id=document.id)
        assert [entry.action for entry in entries] == ["upload"]

    async def test_duplicate_across_records_rejected(
        self, records, uploads, uow_factory, storage
    ) -> None:
        first = await records.create("p1", "clerk")
        second = await records.create("p2", "clerk")
        original = await uploads.upload(first.id, _candidate())

        with pytest.raises(DuplicateDocumentException) as exc_info:
            await uploads.upload(second.id, _candidate(name="copy.pdf"))

        assert exc_info.value.details["existing_document_id"] == original.id
        async with uow_factory() as uow:
            assert len(await uow.documents.list_by_record(first.id)) == 1
            assert await uow.documents.list_by_record(second.id) == []
        assert await _stored_refs(storage) == [original.storage_ref]

    async def test_unique_index_reports_duplicate(
        self, records, content_store, storage, monkeypatch
    ) -> None:
        """A digest that slips past the lookup is still refused by the index."""
        record = await records.create("p1", "clerk")
        await content_store.store(_candidate(), record.id)

        async def no_match(self, digest):
            return None

        monkeypatch.setattr(DocumentRepository, "get_by_digest", no_match)
        with pytest.raises(DuplicateDocumentException):
            await content_store.store(_candidate(name="again.pdf"), record.id)
        assert len(await _stored_refs(storage)) == 1

    async def test_unknown_record(self, uploads, storage) -> None:
        with pytest.raises(ResourceNotFoundException):
            await uploads.upload("missing", _candidate())
        assert await _stored_refs(storage) == []

    async def test_empty_file_rejected(self, records, uploads) -> None:
        record = await records.create("p1", "clerk")
        with pytest.raises(ValidationException, match="empty"):
            await uploads.upload(record.id, _candidate(data=b""))

    async def test_reserved_filename_rejected(self, records, uploads) -> None:
        record = await records.create("p1", "clerk")
        with pytest.raises(ValidationException) as exc_info:
            await uploads.upload(record.id, _candidate(name="CON.pdf"))
        assert exc_info.value.details == {"field": "filename"}


class TestRetrieveAndVerify:
    async def test_download_streams_bytes(self, records, uploads, queries) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate())

        meta, chunks = await queries.download(document.id, "clerk")
        body = b"".join([chunk async for chunk in chunks])
        assert body == PDF
        assert meta.id == document.id

    async def test_download_missing_blob(self, records, uploads, queries, storage) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate())
        (storage.storage_root / document.storage_ref).unlink()

        with pytest.raises(MissingBlobException):
            await queries.download(document.id, "clerk")

    async def test_verify_valid(self, records, uploads, queries) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate())

        result = await queries.verify(document.id, "auditor")
        assert result.valid
        assert result.current_digest == document.digest

    async def test_verify_rehashes_with_store_hasher(
        self, records, uploads, uow_factory, storage, monkeypatch
    ) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate())

        class CountingSHA256(SHA256Algorithm):
            created = 0

            def new(self):
                CountingSHA256.created += 1
                return super().new()

        async def backend_checksum(self, storage_ref):
            raise AssertionError("verification must hash through the content store")

        monkeypatch.setattr(LocalStorageService, "compute_checksum", backend_checksum)
        store = ContentStore(uow_factory, storage, HashService(CountingSHA256()))

        result = await store.verify_integrity(document.id)
        assert result.valid
        assert CountingSHA256.created == 1

    async def test_verify_tampered(self, records, uploads, queries, storage) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate())
        (storage.storage_root / document.storage_ref).write_bytes(PDF + b"tampered")

        result = await queries.verify(document.id, "auditor")
        assert not result.valid
        assert result.stored_digest == document.digest
        assert result.current_digest == HashService().hash_bytes(PDF + b"tampered")

    async def test_verify_missing_file_reports_invalid(
        self, records, uploads, queries, storage
    ) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate())
        (storage.storage_root / document.storage_ref).unlink()

        result = await queries.verify(document.id, "auditor")
        assert not result.valid
        assert result.current_digest is None

    async def test_list_oldest_first(self, records, uploads, queries) -> None:
        record = await records.create("p1", "clerk")
        first = await uploads.upload(record.id, _candidate(data=PDF + b"1"))
        second = await uploads.upload(record.id, _candidate(data=PDF + b"2"))

        listed = await queries.list_for_record(record.id)
        assert [d.id for d in listed] == [first.id, second.id]

    async def test_list_unknown_record(self, queries) -> None:
        with pytest.raises(ResourceNotFoundException):
            await queries.list_for_record("missing")


class TestDelete:
    async def test_delete_removes_row_and_file(
        self, records, uploads, content_store, audit, uow_factory, storage
    ) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate())

        await DocumentDeletionService(content_store, audit).delete(document.id, "clerk")

        async with uow_factory() as uow:
            assert await uow.documents.get_by_id(document.id) is None
        assert await _stored_refs(storage) == []

    async def test_delete_with_missing_file_succeeds(
        self, records, uploads, content_store, audit, uow_factory, storage
    ) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate())
        (storage.storage_root / document.storage_ref).unlink()

        await DocumentDeletionService(content_store, audit).delete(document.id, "clerk")

        async with uow_factory() as uow:
            assert await uow.documents.get_by_id(document.id) is None

    async def test_same_content_accepted_after_delete(
        self, records, uploads, content_store, audit
    ) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _candidate())
        await DocumentDeletionService(content_store, audit).delete(document.id, "clerk")

        again = await uploads.upload(record.id, _candidate())
        assert again.digest == document.digest

    async def test_delete_unknown(self, content_store, audit) -> None:
        with pytest.raises(ResourceNotFoundException):
            await DocumentDeletionService(content_store, audit).delete("missing", "clerk")
