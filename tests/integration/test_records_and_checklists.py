"""Integration tests for medical records, checklists and the retention review."""

import io
from datetime import UTC, date, datetime, timedelta

import pytest

from recordvault.application.dtos.document import UploadCandidate
from recordvault.application.services import expiry_of
from recordvault.application.use_cases.checklists import ChecklistService
from recordvault.application.use_cases.documents import DocumentUploadService
from recordvault.application.use_cases.records import (
    MedicalRecordService,
    RetentionReviewUseCase,
)
from recordvault.domain.entities.checklist import ALL_ITEMS, MANDATORY_ITEMS
from recordvault.domain.exceptions import (
    ResourceNotFoundException,
    ValidationException,
)
from recordvault.shared.utils.datetime import utc_now


@pytest.fixture
def records(uow_factory, content_store, audit) -> MedicalRecordService:
    return MedicalRecordService(uow_factory, content_store, audit)


@pytest.fixture
def checklists(uow_factory, audit) -> ChecklistService:
    return ChecklistService(uow_factory, audit)


@pytest.fixture
def uploads(uow_factory, content_store, audit) -> DocumentUploadService:
    return DocumentUploadService(
        content_store=content_store,
        uow_factory=uow_factory,
        audit=audit,
        allowed_mime_types=frozenset({"application/pdf"}),
        max_upload_size=1024,
    )


def _pdf(data: bytes, **overrides) -> UploadCandidate:
    fields = {
        "original_filename": "page.pdf",
        "mime_type": "application/pdf",
        "stream": io.BytesIO(data),
    }
    fields.update(overrides)
    return UploadCandidate(**fields)


class TestMedicalRecords:
    async def test_create_derives_expiry(self, records) -> None:
        record = await records.create(
            "p1",
            "clerk",
            last_activity_date=datetime(2024, 3, 15, 9, 0, tzinfo=UTC),
        )
        assert record.status == "active"
        assert record.retention_expiry_date == datetime(2044, 3, 15, 9, 0, tzinfo=UTC)

    async def test_create_without_activity_starts_clock_now(self, records) -> None:
        before = utc_now()
        record = await records.create("p1", "clerk")
        assert record.last_activity_date >= before - timedelta(seconds=1)
        assert record.retention_expiry_date == expiry_of(record.last_activity_date)

    async def test_blank_patient_rejected(self, records) -> None:
        with pytest.raises(ValidationException):
            await records.create("   ", "clerk")

    async def test_update_activity_recomputes_expiry(self, records) -> None:
        record = await records.create("p1", "clerk")
        updated = await records.update(
            record.id,
            "clerk",
            {"last_activity_date": datetime(2020, 2, 29, tzinfo=UTC)},
        )
        assert updated.retention_expiry_date == datetime(2040, 2, 29, tzinfo=UTC)

    async def test_update_leaves_unsent_fields(self, records) -> None:
        record = await records.create("p1", "clerk", description="Cardiology")
        updated = await records.update(record.id, "clerk", {"status": "archived"})
        assert updated.status == "archived"
        assert updated.description == "Cardiology"

    async def test_update_rejects_derived_field(self, records) -> None:
        record = await records.create("p1", "clerk")
        with pytest.raises(ValidationException):
            await records.update(
                record.id, "clerk", {"retention_expiry_date": datetime(2099, 1, 1)}
            )

    async def test_update_rejects_bad_status(self, records) -> None:
        record = await records.create("p1", "clerk")
        with pytest.raises(ValidationException, match="Invalid status"):
            await records.update(record.id, "clerk", {"status": "shredded"})

    async def test_list_filters_by_patient(self, records) -> None:
        await records.create("p1", "clerk")
        await records.create("p2", "clerk")
        listed = await records.list(patient_id="p2")
        assert [r.patient_id for r in listed] == ["p2"]

    async def test_get_unknown(self, records) -> None:
        with pytest.raises(ResourceNotFoundException):
            await records.get("missing", "clerk")

    async def test_delete_cascades_documents_checklist_and_files(
        self, records, uploads, checklists, uow_factory, storage
    ) -> None:
        record = await records.create("p1", "clerk")
        document = await uploads.upload(record.id, _pdf(b"%PDF-a"))
        await checklists.upsert(record.id, "officer", {"is_legible": True})

        await records.delete(record.id, "clerk")

        async with uow_factory() as uow:
            assert not await uow.records.exists(record.id)
            assert await uow.documents.get_by_id(document.id) is None
            assert await uow.checklists.get(record.id) is None
        assert [ref async for ref in storage.list_refs("records")] == []

    async def test_delete_unknown(self, records) -> None:
        with pytest.raises(ResourceNotFoundException):
            await records.delete("missing", "clerk")


class TestChecklistService:
    async def test_get_without_saved_checklist(self, records, checklists) -> None:
        record = await records.create("p1", "clerk")
        result = await checklists.get(record.id, "officer")
        assert set(result.items) == set(ALL_ITEMS)
        assert not any(result.items.values())
        assert result.created_at is None

    async def test_upsert_creates_then_merges(self, records, checklists) -> None:
        record = await records.create("p1", "clerk")
        await checklists.upsert(record.id, "a", {"has_backup": True}, "first pass")
        result = await checklists.upsert(record.id, "b", {"is_legible": True})
        assert result.items["has_backup"] is True
        assert result.items["is_legible"] is True
        assert result.notes == "first pass"
        assert result.completed_by is None

    async def test_completion_lifecycle(self, records, checklists) -> None:
        record = await records.create("p1", "clerk")
        mandatory = {name: True for name in MANDATORY_ITEMS}

        done = await checklists.upsert(record.id, "officer", mandatory)
        assert done.is_complete
        assert done.completed_at is not None
        assert done.completed_by == "officer"
        assert done.completion_percentage == 67

        undone = await checklists.upsert(record.id, "reviewer", {"has_file_hash": False})
        assert not undone.is_complete
        assert undone.completed_at is None
        assert undone.completed_by is None

        status = await checklists.status(record.id)
        assert status.exists
        assert not status.completed
        assert status.completed_count == 9
        assert status.total_count == 15
        assert status.completion_percentage == 60

    async def test_invalid_upsert_leaves_checklist_unchanged(
        self, records, checklists
    ) -> None:
        record = await records.create("p1", "clerk")
        await checklists.upsert(record.id, "a", {"has_backup": True})
        with pytest.raises(ValidationException):
            await checklists.upsert(record.id, "a", {"has_backup": False, "nope": True})
        result = await checklists.get(record.id, "a")
        assert result.items["has_backup"] is True

    async def test_status_without_checklist(self, records, checklists) -> None:
        record = await records.create("p1", "clerk")
        status = await checklists.status(record.id)
        assert not status.exists
        assert status.completion_percentage == 0

    async def test_unknown_record(self, checklists) -> None:
        with pytest.raises(ResourceNotFoundException):
            await checklists.upsert("missing", "a", {"has_backup": True})

    async def test_suggestions_from_document_metadata(
        self, records, uploads, checklists
    ) -> None:
        record = await records.create("p1", "clerk")
        await uploads.upload(
            record.id,
            _pdf(b"%PDF-1", digitization_responsible="J. Silva", original_identifier="A-1"),
        )
        await uploads.upload(
            record.id, _pdf(b"%PDF-2", digitization_responsible="J. Silva")
        )

        suggestion = await checklists.suggest_from_documents(record.id)
        assert suggestion.document_count == 2
        assert suggestion.items["has_integrity_hash"] is True
        assert suggestion.items["has_file_hash"] is True
        assert suggestion.items["has_responsible_name"] is True
        assert suggestion.items["has_original_id"] is False
        assert suggestion.items["has_retention_period"] is True

        # Suggestions are never saved.
        assert not (await checklists.status(record.id)).exists

    async def test_suggestions_without_documents(self, records, checklists) -> None:
        record = await records.create("p1", "clerk")
        suggestion = await checklists.suggest_from_documents(record.id)
        assert suggestion.document_count == 0
        assert not any(suggestion.items.values())


class TestRetentionReview:
    async def test_candidates_and_historical(self, records, uow_factory) -> None:
        expired = await records.create(
            "p1", "clerk", last_activity_date=datetime(2000, 6, 1, tzinfo=UTC)
        )
        await records.create(
            "p2",
            "clerk",
            last_activity_date=datetime(2000, 6, 1, tzinfo=UTC),
            has_historical_value=True,
        )
        await records.create(
            "p3", "clerk", last_activity_date=datetime(2010, 6, 1, tzinfo=UTC)
        )
        await records.create("p4", "clerk")

        result = await RetentionReviewUseCase(uow_factory).run(date(2025, 1, 1))

        assert [c.medical_record_id for c in result.candidates] == [expired.id]
        assert result.historical_kept == 1
        assert result.total_candidates == 1

    async def test_expiry_day_is_included(self, records, uow_factory) -> None:
        record = await records.create(
            "p1", "clerk", last_activity_date=datetime(2004, 5, 10, 18, 0, tzinfo=UTC)
        )
        review = RetentionReviewUseCase(uow_factory)

        assert (await review.run(date(2024, 5, 9))).candidates == []
        on_day = await review.run(date(2024, 5, 10))
        assert [c.medical_record_id for c in on_day.candidates] == [record.id]
