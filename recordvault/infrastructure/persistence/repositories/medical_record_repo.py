"""Medical record repository. Returns application DTOs with document counts."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta
from typing import Any

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from recordvault.application.dtos.medical_record import (
    MedicalRecordCreate,
    MedicalRecordResult,
)
from recordvault.infrastructure.persistence.models.checklist import (
    ComplianceChecklist,
)
from recordvault.infrastructure.persistence.models.document import Document
from recordvault.infrastructure.persistence.models.medical_record import (
    MedicalRecord,
)
from recordvault.infrastructure.persistence.repositories.base import BaseRepository
from recordvault.shared.utils import ensure_utc, utc_now

_COLUMNS = frozenset(
    {
        "patient_id",
        "description",
        "start_date",
        "last_activity_date",
        "retention_expiry_date",
        "has_historical_value",
        "status",
    }
)


def _record_to_result(r: MedicalRecord, document_count: int = 0) -> MedicalRecordResult:
    """Map ORM MedicalRecord to application MedicalRecordResult."""
    return MedicalRecordResult(
        id=r.id,
        patient_id=r.patient_id,
        description=r.description,
        start_date=r.start_date,
        last_activity_date=ensure_utc(r.last_activity_date),
        retention_expiry_date=ensure_utc(r.retention_expiry_date),
        has_historical_value=bool(r.has_historical_value),
        status=r.status,
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
        document_count=document_count,
    )


def _with_document_count() -> Select[Any]:
    count = (
        select(func.count(Document.id))
        .where(Document.medical_record_id == MedicalRecord.id)
        .correlate(MedicalRecord)
        .scalar_subquery()
    )
    return select(MedicalRecord, count.label("document_count"))


class MedicalRecordRepository(BaseRepository[MedicalRecord]):
    """Medical record repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, MedicalRecord)

    async def get_by_id(self, record_id: str) -> MedicalRecordResult | None:
        result = await self.db.execute(
            _with_document_count().where(MedicalRecord.id == record_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        record, document_count = row
        return _record_to_result(record, document_count or 0)

    async def exists(self, record_id: str) -> bool:
        result = await self.db.execute(
            select(MedicalRecord.id).where(MedicalRecord.id == record_id)
        )
        return result.scalar_one_or_none() is not None

    async def list(
        self,
        *,
        patient_id: str | None = None,
        status: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[MedicalRecordResult]:
        q = _with_document_count()
        if patient_id is not None:
            q = q.where(MedicalRecord.patient_id == patient_id)
        if status is not None:
            q = q.where(MedicalRecord.status == status)
        q = (
            q.order_by(MedicalRecord.created_at.desc(), MedicalRecord.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(q)
        return [_record_to_result(r, c or 0) for r, c in result.all()]

    async def create(self, record: MedicalRecordCreate) -> MedicalRecordResult:
        created = await self._add(
            MedicalRecord(
                id=record.id,
                patient_id=record.patient_id,
                description=record.description,
                start_date=record.start_date,
                last_activity_date=record.last_activity_date,
                retention_expiry_date=record.retention_expiry_date,
                has_historical_value=record.has_historical_value,
                status=record.status,
            )
        )
        return _record_to_result(created)

    async def update(self, record_id: str, **fields: Any) -> MedicalRecordResult | None:
        unknown = set(fields) - _COLUMNS
        if unknown:
            raise ValueError(f"Not updatable: {', '.join(sorted(unknown))}")
        row = await self._get_orm_by_id(record_id)
        if row is None:
            return None
        for name, value in fields.items():
            setattr(row, name, value)
        await self._save(row)
        return await self.get_by_id(record_id)

    async def touch_activity(
        self, record_id: str, activity_at: datetime, retention_expiry: datetime | None
    ) -> bool:
        result = await self.db.execute(
            update(MedicalRecord)
            .where(MedicalRecord.id == record_id)
            .values(
                last_activity_date=activity_at,
                retention_expiry_date=retention_expiry,
                updated_at=utc_now(),
            )
        )
        return result.rowcount == 1

    async def delete(self, record_id: str) -> bool:
        """Delete the record with its documents and checklist in this transaction."""
        if not await self.exists(record_id):
            return False
        await self.db.execute(
            delete(Document).where(Document.medical_record_id == record_id)
        )
        await self.db.execute(
            delete(ComplianceChecklist).where(
                ComplianceChecklist.medical_record_id == record_id
            )
        )
        result = await self.db.execute(
            delete(MedicalRecord).where(MedicalRecord.id == record_id)
        )
        return result.rowcount == 1

    async def list_expired(self, as_of: date) -> list[MedicalRecordResult]:
        """Records with an expiry on or before as_of (UTC calendar day)."""
        cutoff = datetime.combine(as_of + timedelta(days=1), time.min, tzinfo=UTC)
        result = await self.db.execute(
            _with_document_count()
            .where(
                MedicalRecord.retention_expiry_date.is_not(None),
                MedicalRecord.retention_expiry_date < cutoff,
            )
            .order_by(MedicalRecord.retention_expiry_date.asc(), MedicalRecord.id.asc())
        )
        return [_record_to_result(r, c or 0) for r, c in result.all()]
