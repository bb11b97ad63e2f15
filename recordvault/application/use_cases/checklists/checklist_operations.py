"""Compliance checklist operations: read, upsert, status, catalog and suggestions."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from recordvault.application.dtos.audit_log import AuditOrigin
from recordvault.application.dtos.checklist import (
    ChecklistResult,
    ChecklistStatus,
    ChecklistSuggestion,
    RequirementGroup,
    RequirementView,
)
from recordvault.application.interfaces.repositories import UnitOfWorkFactory
from recordvault.application.interfaces.services import IAuditRecorder
from recordvault.application.services.hash_service import HashService
from recordvault.domain.entities.checklist import (
    ALL_ITEMS,
    CATEGORY_TITLES,
    ChecklistState,
    completion_percentage,
    grouped_catalog,
)
from recordvault.domain.exceptions import ResourceNotFoundException
from recordvault.shared.enums import AuditAction, AuditEntityType
from recordvault.shared.utils.datetime import utc_now
from recordvault.shared.utils.sanitization import sanitize_text

logger = logging.getLogger(__name__)


def requirement_catalog() -> list[RequirementGroup]:
    """Static catalog grouped by category, in catalog order."""
    return [
        RequirementGroup(
            category=category.value,
            title=CATEGORY_TITLES[category],
            items=[
                RequirementView(field=i.field, label=i.label, mandatory=i.mandatory)
                for i in items
            ],
        )
        for category, items in grouped_catalog()
    ]


class ChecklistService:
    """One checklist per medical record; completion is always derived, never set."""

    def __init__(self, uow_factory: UnitOfWorkFactory, audit: IAuditRecorder) -> None:
        self._uow_factory = uow_factory
        self.audit = audit

    async def get(
        self,
        record_id: str,
        actor_id: str | None,
        origin: AuditOrigin | None = None,
    ) -> ChecklistResult:
        """Return the checklist; a record without one gets an unsaved all-false checklist."""
        async with self._uow_factory() as uow:
            if not await uow.records.exists(record_id):
                raise ResourceNotFoundException("medical_record", record_id)
            result = await uow.checklists.get(record_id)
        if result is None:
            result = ChecklistResult.from_state(ChecklistState.blank(record_id))
        await self.audit.record(
            actor_id, AuditAction.READ, AuditEntityType.CHECKLIST, record_id, None, origin
        )
        return result

    async def upsert(
        self,
        record_id: str,
        actor_id: str | None,
        item_values: Mapping[str, object],
        notes: str | None = None,
        origin: AuditOrigin | None = None,
    ) -> ChecklistResult:
        """Merge item values into the record's checklist, creating it on first write.

        Raises:
            ResourceNotFoundException: No such medical record.
            ValidationException: Unknown item or non-boolean value.
        """
        async with self._uow_factory() as uow:
            if not await uow.records.exists(record_id):
                raise ResourceNotFoundException("medical_record", record_id)
            state = await uow.checklists.get_state(record_id)
            if state is None:
                state = ChecklistState.blank(record_id)
            was_complete = state.completed_at is not None
            state.apply(item_values, actor_id, sanitize_text(notes), utc_now())
            result = await uow.checklists.save(state)
        if result.is_complete != was_complete:
            logger.info(
                "Checklist for record %s is now %s",
                record_id,
                "complete" if result.is_complete else "incomplete",
            )
        await self.audit.record(
            actor_id,
            AuditAction.UPDATE,
            AuditEntityType.CHECKLIST,
            record_id,
            {
                "items": sorted(item_values),
                "completed": result.is_complete,
                "completion_percentage": result.completion_percentage,
            },
            origin,
        )
        return result

    async def status(self, record_id: str) -> ChecklistStatus:
        """Completion summary over all items."""
        async with self._uow_factory() as uow:
            if not await uow.records.exists(record_id):
                raise ResourceNotFoundException("medical_record", record_id)
            result = await uow.checklists.get(record_id)
        total = len(ALL_ITEMS)
        if result is None:
            return ChecklistStatus(
                exists=False,
                completed=False,
                completion_percentage=0,
                completed_count=0,
                total_count=total,
            )
        completed_count = sum(1 for v in result.items.values() if v)
        return ChecklistStatus(
            exists=True,
            completed=result.is_complete,
            completion_percentage=completion_percentage(completed_count, total),
            completed_count=completed_count,
            total_count=total,
        )

    async def suggest_from_documents(self, record_id: str) -> ChecklistSuggestion:
        """Derive metadata-backed items from the record's stored documents.

        An item is suggested true only when every document supports it. The
        suggestion is not written; the compliance officer decides.
        """
        async with self._uow_factory() as uow:
            record = await uow.records.get_by_id(record_id)
            if record is None:
                raise ResourceNotFoundException("medical_record", record_id)
            documents = await uow.documents.list_by_record(record_id, skip=0, limit=None)

        has_documents = bool(documents)
        hashed = has_documents and all(
            HashService.is_valid_digest(d.digest) for d in documents
        )
        items = {
            "has_integrity_hash": hashed,
            "has_file_hash": hashed,
            "has_responsible_name": has_documents
            and all(d.digitization_responsible for d in documents),
            "has_digitization_date": has_documents
            and all(d.created_at is not None for d in documents),
            "has_original_id": has_documents
            and all(d.original_identifier for d in documents),
            "has_retention_period": record.retention_expiry_date is not None,
        }
        return ChecklistSuggestion(
            medical_record_id=record_id,
            document_count=len(documents),
            items=items,
        )
