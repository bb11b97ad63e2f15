"""Application DTOs (no ORM dependency)."""

from recordvault.application.dtos.audit_log import (
    AuditEntryCreate,
    AuditEntryResult,
    AuditOrigin,
)
from recordvault.application.dtos.checklist import (
    ChecklistResult,
    ChecklistStatus,
    ChecklistSuggestion,
    RequirementGroup,
    RequirementView,
)
from recordvault.application.dtos.document import (
    DocumentCreate,
    DocumentResult,
    IntegrityResult,
    UploadCandidate,
)
from recordvault.application.dtos.medical_record import (
    MedicalRecordCreate,
    MedicalRecordResult,
)
from recordvault.application.dtos.reconciliation import MissingBlob, ReconciliationReport
from recordvault.application.dtos.retention import (
    RetentionCandidate,
    RetentionReviewResult,
)

__all__ = [
    "AuditEntryCreate",
    "AuditEntryResult",
    "AuditOrigin",
    "ChecklistResult",
    "ChecklistStatus",
    "ChecklistSuggestion",
    "DocumentCreate",
    "DocumentResult",
    "IntegrityResult",
    "MedicalRecordCreate",
    "MedicalRecordResult",
    "MissingBlob",
    "ReconciliationReport",
    "RequirementGroup",
    "RequirementView",
    "RetentionCandidate",
    "RetentionReviewResult",
    "UploadCandidate",
]
