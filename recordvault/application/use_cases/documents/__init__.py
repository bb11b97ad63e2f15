"""Document use cases: content store, upload/query/delete, OCR enrichment, reconciliation."""

from recordvault.application.use_cases.documents.content_store import (
    ContentStore,
    storage_ref_for,
)
from recordvault.application.use_cases.documents.document_operations import (
    DocumentDeletionService,
    DocumentQueryService,
    DocumentUploadService,
)
from recordvault.application.use_cases.documents.ocr_enrichment import (
    OcrEnrichmentService,
)
from recordvault.application.use_cases.documents.reconciliation import (
    StorageReconciliationUseCase,
)

__all__ = [
    "ContentStore",
    "DocumentDeletionService",
    "DocumentQueryService",
    "DocumentUploadService",
    "OcrEnrichmentService",
    "StorageReconciliationUseCase",
    "storage_ref_for",
]
