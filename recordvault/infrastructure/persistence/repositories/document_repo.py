"""Document repository. Returns application DTOs."""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from recordvault.application.dtos.document import DocumentCreate, DocumentResult
from recordvault.domain.exceptions import DuplicateDocumentException
from recordvault.infrastructure.persistence.models.document import Document
from recordvault.infrastructure.persistence.repositories.base import BaseRepository
from recordvault.shared.utils import ensure_utc

logger = logging.getLogger(__name__)


def _create_to_document(d: DocumentCreate) -> Document:
    """Map DocumentCreate (write-model) to ORM Document for persistence."""
    return Document(
        id=d.id,
        medical_record_id=d.medical_record_id,
        original_filename=d.original_filename,
        stored_filename=d.stored_filename,
        mime_type=d.mime_type,
        file_size=d.file_size,
        storage_ref=d.storage_ref,
        digest=d.digest,
        category=d.category,
        document_date=d.document_date,
        description=d.description,
        digitization_responsible=d.digitization_responsible,
        original_identifier=d.original_identifier,
        resolution_dpi=d.resolution_dpi,
        uploaded_by=d.uploaded_by,
        ocr_processed=False,
    )


def _document_to_result(d: Document) -> DocumentResult:
    """Map ORM Document to application DocumentResult."""
    return DocumentResult(
        id=d.id,
        medical_record_id=d.medical_record_id,
        original_filename=d.original_filename,
        stored_filename=d.stored_filename,
        mime_type=d.mime_type,
        file_size=d.file_size,
        storage_ref=d.storage_ref,
        digest=d.digest,
        category=d.category,
        document_date=d.document_date,
        description=d.description,
        digitization_responsible=d.digitization_responsible,
        original_identifier=d.original_identifier,
        resolution_dpi=d.resolution_dpi,
        uploaded_by=d.uploaded_by,
        created_at=ensure_utc(d.created_at),
        ocr_text=d.ocr_text,
        ocr_processed=bool(d.ocr_processed),
    )


def _is_digest_collision(exc: IntegrityError) -> bool:
    message = str(exc.orig).lower()
    return "ux_document_digest" in message or "document.digest" in message


class DocumentRepository(BaseRepository[Document]):
    """Document repository. create_document() accepts DocumentCreate; returns DocumentResult."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        row = await self._get_orm_by_id(document_id)
        return _document_to_result(row) if row else None

    async def get_by_digest(self, digest: str) -> DocumentResult | None:
        result = await self.db.execute(
            select(Document).where(Document.digest == digest.lower())
        )
        row = result.scalar_one_or_none()
        return _document_to_result(row) if row else None

    async def list_by_record(
        self, medical_record_id: str, *, skip: int = 0, limit: int | None = 100
    ) -> list[DocumentResult]:
        q = (
            select(Document)
            .where(Document.medical_record_id == medical_record_id)
            .order_by(Document.created_at.asc(), Document.id.asc())
            .offset(skip)
        )
        if limit is not None:
            q = q.limit(limit)
        result = await self.db.execute(q)
        return [_document_to_result(d) for d in result.scalars().all()]

    async def list_storage_refs(self) -> dict[str, str]:
        result = await self.db.execute(select(Document.storage_ref, Document.id))
        return {ref: doc_id for ref, doc_id in result.all()}

    async def create_document(self, document: DocumentCreate) -> DocumentResult:
        """Insert the row; the unique digest index is the last word on duplicates.

        Raises:
            DuplicateDocumentException: Another row already holds this digest.
        """
        try:
            created = await self._add(_create_to_document(document))
        except IntegrityError as exc:
            if _is_digest_collision(exc):
                logger.info("Digest collision on insert for %s", document.digest)
                raise DuplicateDocumentException(document.digest) from exc
            raise
        return _document_to_result(created)

    async def delete(self, document_id: str) -> bool:
        row = await self._get_orm_by_id(document_id)
        if row is None:
            return False
        await self._remove(row)
        return True

    async def set_ocr_text(self, document_id: str, text: str | None) -> bool:
        result = await self.db.execute(
            update(Document)
            .where(Document.id == document_id)
            .values(ocr_text=text, ocr_processed=True)
        )
        return result.rowcount == 1
