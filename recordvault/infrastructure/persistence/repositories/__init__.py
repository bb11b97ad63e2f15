"""Persistence repositories. Re-exports for the unit of work and tests."""

from recordvault.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from recordvault.infrastructure.persistence.repositories.base import BaseRepository
from recordvault.infrastructure.persistence.repositories.checklist_repo import (
    ChecklistRepository,
)
from recordvault.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from recordvault.infrastructure.persistence.repositories.medical_record_repo import (
    MedicalRecordRepository,
)

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "ChecklistRepository",
    "DocumentRepository",
    "MedicalRecordRepository",
]
