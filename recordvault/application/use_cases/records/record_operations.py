"""Medical record operations: create, read, list, update, delete."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from recordvault.application.dtos.audit_log import AuditOrigin
from recordvault.application.dtos.medical_record import (
    MedicalRecordCreate,
    MedicalRecordResult,
)
from recordvault.application.interfaces.repositories import UnitOfWorkFactory
from recordvault.application.interfaces.services import IAuditRecorder
from recordvault.application.services.retention_calculator import expiry_of
from recordvault.application.use_cases.documents.content_store import ContentStore
from recordvault.domain.enums import RecordStatus
from recordvault.domain.exceptions import ResourceNotFoundException, ValidationException
from recordvault.shared.enums import AuditAction, AuditEntityType
from recordvault.shared.utils.datetime import ensure_utc, utc_now
from recordvault.shared.utils.generators import generate_cuid
from recordvault.shared.utils.sanitization import sanitize_text

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({
    "description",
    "start_date",
    "last_activity_date",
    "has_historical_value",
    "status",
})


def _status_value(status: str | RecordStatus) -> str:
    try:
        return RecordStatus(status).value
    except ValueError as e:
        raise ValidationException(
            f"Invalid status: {status}. Allowed: {', '.join(RecordStatus.values())}",
            field="status",
        ) from e


class MedicalRecordService:
    """Create and manage medical records. retention_expiry_date is always derived."""

    MAX_PAGE_SIZE = 500

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        content_store: ContentStore,
        audit: IAuditRecorder,
    ) -> None:
        self._uow_factory = uow_factory
        self.content_store = content_store
        self.audit = audit

    async def create(
        self,
        patient_id: str,
        actor_id: str | None,
        *,
        description: str | None = None,
        start_date: date | None = None,
        last_activity_date: datetime | None = None,
        has_historical_value: bool = False,
        origin: AuditOrigin | None = None,
    ) -> MedicalRecordResult:
        """Create a record; the expiry follows from last_activity_date (default: now)."""
        patient_id = (patient_id or "").strip()
        if not patient_id:
            raise ValidationException("patient_id is required", field="patient_id")
        last_activity = ensure_utc(last_activity_date) or utc_now()
        record = MedicalRecordCreate(
            id=generate_cuid(),
            patient_id=patient_id,
            description=sanitize_text(description),
            start_date=start_date,
            last_activity_date=last_activity,
            retention_expiry_date=expiry_of(last_activity),
            has_historical_value=has_historical_value,
            status=RecordStatus.ACTIVE.value,
        )
        async with self._uow_factory() as uow:
            result = await uow.records.create(record)
        await self.audit.record(
            actor_id,
            AuditAction.CREATE,
            AuditEntityType.MEDICAL_RECORD,
            result.id,
            {"patient_id": result.patient_id},
            origin,
        )
        return result

    async def get(
        self,
        record_id: str,
        actor_id: str | None,
        origin: AuditOrigin | None = None,
    ) -> MedicalRecordResult:
        """Return record; raise ResourceNotFoundException if not found."""
        async with self._uow_factory() as uow:
            result = await uow.records.get_by_id(record_id)
        if result is None:
            raise ResourceNotFoundException("medical_record", record_id)
        await self.audit.record(
            actor_id, AuditAction.READ, AuditEntityType.MEDICAL_RECORD, record_id, None, origin
        )
        return result

    async def list(
        self,
        *,
        patient_id: str | None = None,
        status: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[MedicalRecordResult]:
        if status is not None:
            status = _status_value(status)
        async with self._uow_factory() as uow:
            return await uow.records.list(
                patient_id=patient_id,
                status=status,
                skip=max(0, skip),
                limit=max(1, min(limit, self.MAX_PAGE_SIZE)),
            )

    async def update(
        self,
        record_id: str,
        actor_id: str | None,
        changes: dict[str, Any],
        origin: AuditOrigin | None = None,
    ) -> MedicalRecordResult:
        """Apply a partial update. Keys absent from changes are left as they are.

        Setting last_activity_date (including to None) recomputes the expiry.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        fields: dict[str, Any] = dict(changes)
        if "description" in fields:
            fields["description"] = sanitize_text(fields["description"])
        if "status" in fields:
            if fields["status"] is None:
                raise ValidationException("status cannot be null", field="status")
            fields["status"] = _status_value(fields["status"])
        if "has_historical_value" in fields and fields["has_historical_value"] is None:
            raise ValidationException(
                "has_historical_value cannot be null", field="has_historical_value"
            )
        if "last_activity_date" in fields:
            last_activity = ensure_utc(fields["last_activity_date"])
            fields["last_activity_date"] = last_activity
            fields["retention_expiry_date"] = expiry_of(last_activity)

        async with self._uow_factory() as uow:
            result = await uow.records.update(record_id, **fields)
        if result is None:
            raise ResourceNotFoundException("medical_record", record_id)
        await self.audit.record(
            actor_id,
            AuditAction.UPDATE,
            AuditEntityType.MEDICAL_RECORD,
            record_id,
            {"fields": sorted(changes)},
            origin,
        )
        return result

    async def delete(
        self,
        record_id: str,
        actor_id: str | None,
        origin: AuditOrigin | None = None,
    ) -> None:
        """Delete a record with its documents and checklist.

        Rows go in one transaction; files are removed afterwards and a file
        that cannot be removed is only logged.
        """
        async with self._uow_factory() as uow:
            if not await uow.records.exists(record_id):
                raise ResourceNotFoundException("medical_record", record_id)
            documents = await uow.documents.list_by_record(record_id, skip=0, limit=None)
            await uow.records.delete(record_id)
        storage_refs = [d.storage_ref for d in documents]
        removed = await self.content_store.remove_files(storage_refs)
        logger.info(
            "Deleted record %s with %d document(s), %d file(s) removed",
            record_id,
            len(documents),
            removed,
        )
        await self.audit.record(
            actor_id,
            AuditAction.DELETE,
            AuditEntityType.MEDICAL_RECORD,
            record_id,
            {"documents_removed": len(documents)},
            origin,
        )
