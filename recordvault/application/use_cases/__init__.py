"""Application use cases: one entry point per workflow."""

from recordvault.application.use_cases.checklists import (
    ChecklistService,
    requirement_catalog,
)
from recordvault.application.use_cases.documents import (
    ContentStore,
    DocumentDeletionService,
    DocumentQueryService,
    DocumentUploadService,
    OcrEnrichmentService,
    StorageReconciliationUseCase,
)
from recordvault.application.use_cases.records import (
    MedicalRecordService,
    RetentionReviewUseCase,
)

__all__ = [
    "ChecklistService",
    "ContentStore",
    "DocumentDeletionService",
    "DocumentQueryService",
    "DocumentUploadService",
    "MedicalRecordService",
    "OcrEnrichmentService",
    "RetentionReviewUseCase",
    "StorageReconciliationUseCase",
    "requirement_catalog",
]
