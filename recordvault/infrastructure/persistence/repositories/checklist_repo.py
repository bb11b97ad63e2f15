"""Compliance checklist repository. One row per medical record."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from recordvault.application.dtos.checklist import ChecklistResult
from recordvault.domain.entities.checklist import ALL_ITEMS, ChecklistState
from recordvault.infrastructure.persistence.models.checklist import (
    ComplianceChecklist,
)
from recordvault.infrastructure.persistence.repositories.base import BaseRepository
from recordvault.shared.utils import ensure_utc


def _row_to_state(row: ComplianceChecklist) -> ChecklistState:
    return ChecklistState(
        medical_record_id=row.medical_record_id,
        items={name: bool(getattr(row, name)) for name in ALL_ITEMS},
        notes=row.notes,
        completed_by=row.completed_by,
        completed_at=ensure_utc(row.completed_at),
    )


def _row_to_result(row: ComplianceChecklist) -> ChecklistResult:
    return ChecklistResult.from_state(
        _row_to_state(row),
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


class ChecklistRepository(BaseRepository[ComplianceChecklist]):
    """Checklist repository keyed by medical_record_id."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ComplianceChecklist)

    async def _get_row(self, medical_record_id: str) -> ComplianceChecklist | None:
        result = await self.db.execute(
            select(ComplianceChecklist).where(
                ComplianceChecklist.medical_record_id == medical_record_id
            )
        )
        return result.scalar_one_or_none()

    async def get(self, medical_record_id: str) -> ChecklistResult | None:
        row = await self._get_row(medical_record_id)
        return _row_to_result(row) if row else None

    async def get_state(self, medical_record_id: str) -> ChecklistState | None:
        row = await self._get_row(medical_record_id)
        return _row_to_state(row) if row else None

    async def save(self, state: ChecklistState) -> ChecklistResult:
        row = await self._get_row(state.medical_record_id)
        is_new = row is None
        if row is None:
            row = ComplianceChecklist(medical_record_id=state.medical_record_id)
        for name in ALL_ITEMS:
            setattr(row, name, state.items[name])
        row.notes = state.notes
        row.completed_by = state.completed_by
        row.completed_at = state.completed_at
        saved = await self._add(row) if is_new else await self._save(row)
        return _row_to_result(saved)
