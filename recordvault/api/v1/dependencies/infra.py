"""Infrastructure dependencies (composition root): units of work, storage, hashing, audit.

Tests replace get_uow_factory and get_storage_service through
app.dependency_overrides; everything else is built on top of those two.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from recordvault.application.interfaces import (
    IStorageService,
    UnitOfWorkFactory,
)
from recordvault.application.services import AuditRecorder, HashService
from recordvault.application.use_cases.documents import (
    ContentStore,
    OcrEnrichmentService,
)
from recordvault.core.config import get_settings
from recordvault.infrastructure.external.ocr import NullTextExtractor
from recordvault.infrastructure.external.storage.factory import StorageFactory
from recordvault.infrastructure.persistence.database import get_session_factory
from recordvault.infrastructure.persistence.unit_of_work import make_uow_factory


def get_uow_factory() -> UnitOfWorkFactory:
    """Unit-of-work factory over the process-wide session factory."""
    return make_uow_factory(get_session_factory())


def get_storage_service() -> IStorageService:
    """Blob storage backend from settings."""
    return StorageFactory.create_storage_service()


def get_hash_service() -> HashService:
    return HashService()


def get_audit_recorder(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> AuditRecorder:
    """Best-effort audit recorder with its own transaction per entry."""
    return AuditRecorder(uow_factory)


def get_content_store(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    storage: Annotated[IStorageService, Depends(get_storage_service)],
    hasher: Annotated[HashService, Depends(get_hash_service)],
) -> ContentStore:
    return ContentStore(uow_factory=uow_factory, storage=storage, hasher=hasher)


def get_ocr_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    storage: Annotated[IStorageService, Depends(get_storage_service)],
) -> OcrEnrichmentService:
    """OCR enrichment with the configured extractor; disabled by OCR_ENABLED=false."""
    return OcrEnrichmentService(
        uow_factory=uow_factory,
        storage=storage,
        extractor=NullTextExtractor(),
        enabled=get_settings().ocr_enabled,
    )
