"""Medical record and checklist dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from recordvault.application.interfaces import UnitOfWorkFactory
from recordvault.application.services import AuditRecorder
from recordvault.application.use_cases.checklists import ChecklistService
from recordvault.application.use_cases.documents import ContentStore
from recordvault.application.use_cases.records import MedicalRecordService

from .infra import get_audit_recorder, get_content_store, get_uow_factory


def get_medical_record_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    content_store: Annotated[ContentStore, Depends(get_content_store)],
    audit: Annotated[AuditRecorder, Depends(get_audit_recorder)],
) -> MedicalRecordService:
    return MedicalRecordService(
        uow_factory=uow_factory, content_store=content_store, audit=audit
    )


def get_checklist_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    audit: Annotated[AuditRecorder, Depends(get_audit_recorder)],
) -> ChecklistService:
    return ChecklistService(uow_factory=uow_factory, audit=audit)
