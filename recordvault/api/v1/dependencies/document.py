"""Document dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from recordvault.application.interfaces import UnitOfWorkFactory
from recordvault.application.services import AuditRecorder
from recordvault.application.use_cases.documents import (
    ContentStore,
    DocumentDeletionService,
    DocumentQueryService,
    DocumentUploadService,
    OcrEnrichmentService,
)
from recordvault.core.config import get_settings

from .infra import (
    get_audit_recorder,
    get_content_store,
    get_ocr_service,
    get_uow_factory,
)


def get_document_upload_service(
    content_store: Annotated[ContentStore, Depends(get_content_store)],
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    audit: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    ocr: Annotated[OcrEnrichmentService, Depends(get_ocr_service)],
) -> DocumentUploadService:
    """Build DocumentUploadService with the configured MIME allow-list and size cap."""
    settings = get_settings()
    return DocumentUploadService(
        content_store=content_store,
        uow_factory=uow_factory,
        audit=audit,
        allowed_mime_types=settings.allowed_mime_type_set,
        max_upload_size=settings.max_upload_size,
        ocr=ocr,
    )


def get_document_query_service(
    content_store: Annotated[ContentStore, Depends(get_content_store)],
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    audit: Annotated[AuditRecorder, Depends(get_audit_recorder)],
) -> DocumentQueryService:
    """Build DocumentQueryService for download, metadata, listing and verify."""
    return DocumentQueryService(
        content_store=content_store, uow_factory=uow_factory, audit=audit
    )


def get_document_deletion_service(
    content_store: Annotated[ContentStore, Depends(get_content_store)],
    audit: Annotated[AuditRecorder, Depends(get_audit_recorder)],
) -> DocumentDeletionService:
    return DocumentDeletionService(content_store=content_store, audit=audit)
