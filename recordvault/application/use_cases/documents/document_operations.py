"""Document operations: upload (write), query (read) and deletion, each with one audit hook."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, BinaryIO

from recordvault.application.dtos.audit_log import AuditOrigin
from recordvault.application.dtos.document import (
    DocumentResult,
    IntegrityResult,
    UploadCandidate,
)
from recordvault.application.interfaces.repositories import UnitOfWorkFactory
from recordvault.application.interfaces.services import IAuditRecorder
from recordvault.application.services.retention_calculator import expiry_of
from recordvault.application.use_cases.documents.content_store import ContentStore
from recordvault.domain.exceptions import ResourceNotFoundException, ValidationException
from recordvault.shared.enums import AuditAction, AuditEntityType
from recordvault.shared.utils.datetime import utc_now
from recordvault.shared.utils.sanitization import sanitize_text

if TYPE_CHECKING:
    from recordvault.application.use_cases.documents.ocr_enrichment import (
        OcrEnrichmentService,
    )

logger = logging.getLogger(__name__)


def _normalize_mime_type(mime_type: str | None) -> str:
    """Lowercase and drop parameters (e.g. '; charset=binary')."""
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def _measure_size(stream: BinaryIO) -> int | None:
    """Size of a seekable stream without reading it; position is reset to 0.

    Returns None for streams that cannot seek.
    """
    seekable = getattr(stream, "seekable", None)
    if callable(seekable) and not seekable():
        return None
    size = stream.seek(0, 2)
    stream.seek(0)
    return size


class DocumentUploadService:
    """Single responsibility: validate an upload, store it, stamp the record's activity."""

    def __init__(
        self,
        content_store: ContentStore,
        uow_factory: UnitOfWorkFactory,
        audit: IAuditRecorder,
        allowed_mime_types: frozenset[str],
        max_upload_size: int,
        ocr: "OcrEnrichmentService | None" = None,
    ) -> None:
        self.content_store = content_store
        self._uow_factory = uow_factory
        self.audit = audit
        self.allowed_mime_types = allowed_mime_types
        self.max_upload_size = max_upload_size
        self.ocr = ocr

    def _validate(self, candidate: UploadCandidate) -> UploadCandidate:
        """Check type, size and metadata before any hashing. Returns a normalized candidate."""
        mime_type = _normalize_mime_type(candidate.mime_type)
        if mime_type not in self.allowed_mime_types:
            raise ValidationException(
                f"File type not allowed: {mime_type or 'unknown'}",
                field="mime_type",
            )
        size = _measure_size(candidate.stream)
        if size is None:
            size = candidate.size
        if size is None:
            raise ValidationException(
                "Upload size could not be determined", field="file"
            )
        if size > self.max_upload_size:
            raise ValidationException(
                f"File exceeds maximum size of {self.max_upload_size} bytes",
                field="file",
            )
        if candidate.resolution_dpi is not None and candidate.resolution_dpi <= 0:
            raise ValidationException(
                "resolution_dpi must be positive", field="resolution_dpi"
            )
        return UploadCandidate(
            original_filename=candidate.original_filename,
            mime_type=mime_type,
            stream=candidate.stream,
            size=size,
            category=candidate.category,
            document_date=candidate.document_date,
            description=sanitize_text(candidate.description),
            digitization_responsible=sanitize_text(candidate.digitization_responsible),
            original_identifier=sanitize_text(candidate.original_identifier),
            resolution_dpi=candidate.resolution_dpi,
            uploaded_by=candidate.uploaded_by,
        )

    async def _stamp_activity(self, medical_record_id: str) -> None:
        """Best effort: the document is already committed, so a failure here is logged."""
        now = utc_now()
        try:
            async with self._uow_factory() as uow:
                touched = await uow.records.touch_activity(
                    medical_record_id, now, expiry_of(now)
                )
        except Exception:
            logger.warning(
                "Could not update activity date of record %s after upload",
                medical_record_id,
                exc_info=True,
            )
            return
        if not touched:
            logger.warning(
                "Record %s vanished before its activity date could be updated",
                medical_record_id,
            )

    async def upload(
        self,
        medical_record_id: str,
        candidate: UploadCandidate,
        origin: AuditOrigin | None = None,
    ) -> DocumentResult:
        """Store an upload under a record. Returns the created document."""
        candidate = self._validate(candidate)
        document = await self.content_store.store(candidate, medical_record_id)
        await self._stamp_activity(medical_record_id)
        if self.ocr is not None:
            self.ocr.schedule(document)
        await self.audit.record(
            candidate.uploaded_by,
            AuditAction.UPLOAD,
            AuditEntityType.DOCUMENT,
            document.id,
            {
                "medical_record_id": medical_record_id,
                "original_filename": document.original_filename,
                "file_size": document.file_size,
                "digest": document.digest,
            },
            origin,
        )
        return document


class DocumentQueryService:
    """Single responsibility: document download, metadata, listing and verification."""

    MAX_PAGE_SIZE = 500

    def __init__(
        self,
        content_store: ContentStore,
        uow_factory: UnitOfWorkFactory,
        audit: IAuditRecorder,
    ) -> None:
        self.content_store = content_store
        self._uow_factory = uow_factory
        self.audit = audit

    async def download(
        self,
        document_id: str,
        actor_id: str | None,
        origin: AuditOrigin | None = None,
    ) -> tuple[DocumentResult, AsyncIterator[bytes]]:
        """Return metadata and the file byte stream; audited as download."""
        document, chunks = await self.content_store.retrieve(document_id)
        await self.audit.record(
            actor_id,
            AuditAction.DOWNLOAD,
            AuditEntityType.DOCUMENT,
            document.id,
            {"original_filename": document.original_filename},
            origin,
        )
        return document, chunks

    async def get_metadata(
        self,
        document_id: str,
        actor_id: str | None,
        origin: AuditOrigin | None = None,
    ) -> DocumentResult:
        """Return document metadata; raise ResourceNotFoundException if not found."""
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        await self.audit.record(
            actor_id, AuditAction.READ, AuditEntityType.DOCUMENT, document.id, None, origin
        )
        return document

    async def list_for_record(
        self, medical_record_id: str, *, skip: int = 0, limit: int = 100
    ) -> list[DocumentResult]:
        """Return documents of a record, oldest first."""
        limit = max(1, min(limit, self.MAX_PAGE_SIZE))
        async with self._uow_factory() as uow:
            if not await uow.records.exists(medical_record_id):
                raise ResourceNotFoundException("medical_record", medical_record_id)
            return await uow.documents.list_by_record(
                medical_record_id, skip=max(0, skip), limit=limit
            )

    async def verify(
        self,
        document_id: str,
        actor_id: str | None,
        origin: AuditOrigin | None = None,
    ) -> IntegrityResult:
        """Re-hash the stored file; audited as read with the outcome."""
        result = await self.content_store.verify_integrity(document_id)
        await self.audit.record(
            actor_id,
            AuditAction.READ,
            AuditEntityType.DOCUMENT,
            document_id,
            {"integrity_check": True, "valid": result.valid},
            origin,
        )
        return result


class DocumentDeletionService:
    """Single responsibility: delete a document (row, then file)."""

    def __init__(self, content_store: ContentStore, audit: IAuditRecorder) -> None:
        self.content_store = content_store
        self.audit = audit

    async def delete(
        self,
        document_id: str,
        actor_id: str | None,
        origin: AuditOrigin | None = None,
    ) -> DocumentResult:
        document = await self.content_store.delete(document_id)
        await self.audit.record(
            actor_id,
            AuditAction.DELETE,
            AuditEntityType.DOCUMENT,
            document.id,
            {
                "medical_record_id": document.medical_record_id,
                "original_filename": document.original_filename,
                "digest": document.digest,
            },
            origin,
        )
        return document
