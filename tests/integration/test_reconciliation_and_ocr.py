"""Integration tests for storage reconciliation and OCR enrichment."""

import io
from datetime import timedelta

import pytest

from recordvault.application.dtos.document import UploadCandidate
from recordvault.application.use_cases.documents import (
    OcrEnrichmentService,
    StorageReconciliationUseCase,
)
from recordvault.application.use_cases.records import MedicalRecordService
from recordvault.infrastructure.external.ocr import NullTextExtractor


class _FixedTextExtractor:
    def __init__(self, text: str | None = "PRONTUARIO 123") -> None:
        self.text = text
        self.calls = 0

    async def extract_text(self, content: bytes, mime_type: str) -> str | None:
        self.calls += 1
        return self.text


class _FailingExtractor:
    async def extract_text(self, content: bytes, mime_type: str) -> str | None:
        raise RuntimeError("engine offline")


@pytest.fixture
async def record(uow_factory, content_store, audit):
    return await MedicalRecordService(uow_factory, content_store, audit).create(
        "p1", "clerk"
    )


async def _store(content_store, record_id: str, data: bytes, mime_type: str = "image/png"):
    candidate = UploadCandidate(
        original_filename="page.png", mime_type=mime_type, stream=io.BytesIO(data)
    )
    return await content_store.store(candidate, record_id)


class TestReconciliation:
    async def test_consistent_store(self, uow_factory, storage, content_store, record) -> None:
        await _store(content_store, record.id, b"page-1")
        report = await StorageReconciliationUseCase(
            uow_factory, storage, grace_period=timedelta(0)
        ).run()
        assert report.is_consistent

    async def test_reports_orphans_and_missing(
        self, uow_factory, storage, content_store, record
    ) -> None:
        document = await _store(content_store, record.id, b"page-1")
        orphan_ref = f"records/{record.id}/orphan.png"
        orphan = storage.storage_root / orphan_ref
        orphan.write_bytes(b"never committed")
        (storage.storage_root / document.storage_ref).unlink()

        report = await StorageReconciliationUseCase(
            uow_factory, storage, grace_period=timedelta(0)
        ).run()

        assert report.orphan_files == [orphan_ref]
        assert [m.document_id for m in report.missing_blobs] == [document.id]
        assert report.removed_orphans == []
        assert not report.is_consistent
        assert orphan.exists()

    async def test_remove_orphans(self, uow_factory, storage, content_store, record) -> None:
        await _store(content_store, record.id, b"page-1")
        orphan_ref = f"records/{record.id}/orphan.png"
        (storage.storage_root / orphan_ref).write_bytes(b"never committed")

        report = await StorageReconciliationUseCase(
            uow_factory, storage, grace_period=timedelta(0)
        ).run(remove_orphans=True)

        assert report.removed_orphans == [orphan_ref]
        assert not (storage.storage_root / orphan_ref).exists()

    async def test_recent_orphans_skipped(
        self, uow_factory, storage, content_store, record
    ) -> None:
        await _store(content_store, record.id, b"page-1")
        (storage.storage_root / f"records/{record.id}/inflight.png").write_bytes(b"x")

        report = await StorageReconciliationUseCase(
            uow_factory, storage, grace_period=timedelta(hours=1)
        ).run()

        assert report.orphan_files == []


class TestOcrEnrichment:
    async def test_enrich_writes_text_once(
        self, uow_factory, storage, content_store, record
    ) -> None:
        document = await _store(content_store, record.id, b"png-bytes")
        extractor = _FixedTextExtractor()
        ocr = OcrEnrichmentService(uow_factory, storage, extractor)

        assert await ocr.enrich(document.id)
        assert await ocr.enrich(document.id)
        assert extractor.calls == 1

        async with uow_factory() as uow:
            stored = await uow.documents.get_by_id(document.id)
        assert stored.ocr_text == "PRONTUARIO 123"
        assert stored.ocr_processed

    async def test_null_extractor_marks_processed(
        self, uow_factory, storage, content_store, record
    ) -> None:
        document = await _store(content_store, record.id, b"png-bytes")
        ocr = OcrEnrichmentService(uow_factory, storage, NullTextExtractor())

        assert await ocr.enrich(document.id)
        async with uow_factory() as uow:
            stored = await uow.documents.get_by_id(document.id)
        assert stored.ocr_text is None
        assert stored.ocr_processed

    async def test_failure_leaves_document_unprocessed(
        self, uow_factory, storage, content_store, record
    ) -> None:
        document = await _store(content_store, record.id, b"png-bytes")
        ocr = OcrEnrichmentService(uow_factory, storage, _FailingExtractor())

        assert not await ocr.enrich(document.id)
        async with uow_factory() as uow:
            stored = await uow.documents.get_by_id(document.id)
        assert not stored.ocr_processed

    async def test_schedule_only_images(
        self, uow_factory, storage, content_store, record
    ) -> None:
        pdf = await _store(content_store, record.id, b"%PDF", mime_type="application/pdf")
        png = await _store(content_store, record.id, b"png-bytes")
        ocr = OcrEnrichmentService(uow_factory, storage, _FixedTextExtractor())

        assert ocr.schedule(pdf) is None
        task = ocr.schedule(png)
        assert task is not None
        assert await task

    async def test_disabled_schedules_nothing(
        self, uow_factory, storage, content_store, record
    ) -> None:
        png = await _store(content_store, record.id, b"png-bytes")
        ocr = OcrEnrichmentService(uow_factory, storage, _FixedTextExtractor(), enabled=False)
        assert ocr.schedule(png) is None
