"""Content store: digest-addressed document storage with metadata.

A document is its stored file plus its metadata row. The row insert is the
commit point: the file is written first, so a crash in between leaves an
orphan file (found by reconciliation) and never a row without bytes.
Digests are unique system-wide; the database unique index is the
authority, the lookup before writing only avoids needless IO.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import BinaryIO

from recordvault.application.dtos.document import (
    DocumentCreate,
    DocumentResult,
    IntegrityResult,
    UploadCandidate,
)
from recordvault.application.interfaces.repositories import UnitOfWorkFactory
from recordvault.application.interfaces.storage import IStorageService
from recordvault.application.services.hash_service import HashService
from recordvault.core.constants import RECORDS_NAMESPACE
from recordvault.domain.exceptions import (
    DuplicateDocumentException,
    MissingBlobException,
    ResourceNotFoundException,
    StorageIOException,
    ValidationException,
)
from recordvault.shared.telemetry.tracing import add_span_attributes, traced
from recordvault.shared.utils.generators import generate_cuid, generate_stored_filename
from recordvault.shared.utils.sanitization import sanitize_filename

logger = logging.getLogger(__name__)


def storage_ref_for(medical_record_id: str, stored_filename: str) -> str:
    """Relative path of a document file: records/<record_id>/<stored_filename>."""
    return f"{RECORDS_NAMESPACE}/{medical_record_id}/{stored_filename}"


class ContentStore:
    """Stores, retrieves, verifies and deletes document content."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        storage: IStorageService,
        hasher: HashService,
    ) -> None:
        self._uow_factory = uow_factory
        self.storage = storage
        self.hasher = hasher

    def _digest_and_size_sync(self, stream: BinaryIO) -> tuple[str, int]:
        """Blocking: digest plus byte count in one pass (run in a worker thread)."""
        digest = self.hasher.hash_stream(stream)
        size = stream.seek(0, 2)
        stream.seek(0)
        return digest, size

    async def _digest_and_size(self, stream: BinaryIO) -> tuple[str, int]:
        try:
            return await asyncio.to_thread(self._digest_and_size_sync, stream)
        except OSError as e:
            raise StorageIOException(
                f"Could not read upload: {e}",
                "STORAGE_UPLOAD_ERROR",
                {"reason": str(e)},
            ) from e

    async def _discard_blob(self, storage_ref: str) -> None:
        """Best-effort removal of a file whose row was never committed."""
        try:
            await self.storage.delete(storage_ref)
        except (StorageIOException, OSError):
            logger.warning(
                "Could not remove uncommitted file %s; left for reconciliation",
                storage_ref,
                exc_info=True,
            )

    @traced("content_store.store")
    async def store(
        self, candidate: UploadCandidate, medical_record_id: str
    ) -> DocumentResult:
        """Hash, write and register one document under a medical record.

        Raises:
            ValidationException: Unusable filename or empty content.
            ResourceNotFoundException: The medical record does not exist.
            DuplicateDocumentException: Identical content is already stored.
            StorageIOException: The upload could not be read or written.
        """
        try:
            original_filename = sanitize_filename(candidate.original_filename)
        except ValueError as e:
            raise ValidationException(str(e), field="filename") from e

        async with self._uow_factory() as uow:
            if not await uow.records.exists(medical_record_id):
                raise ResourceNotFoundException("medical_record", medical_record_id)

        digest, file_size = await self._digest_and_size(candidate.stream)
        if file_size == 0:
            raise ValidationException("Uploaded file is empty", field="file")
        add_span_attributes(digest=digest, file_size=file_size)

        async with self._uow_factory() as uow:
            existing = await uow.documents.get_by_digest(digest)
        if existing is not None:
            logger.info(
                "Rejected duplicate upload for record %s (digest %s, existing %s)",
                medical_record_id,
                digest,
                existing.id,
            )
            raise DuplicateDocumentException(digest, existing.id)

        document_id = generate_cuid()
        stored_filename = generate_stored_filename(original_filename)
        storage_ref = storage_ref_for(medical_record_id, stored_filename)

        await self.storage.upload(
            file_data=candidate.stream,
            storage_ref=storage_ref,
            expected_checksum=digest,
            content_type=candidate.mime_type,
            metadata={
                "document_id": document_id,
                "medical_record_id": medical_record_id,
            },
        )

        create_dto = DocumentCreate(
            id=document_id,
            medical_record_id=medical_record_id,
            original_filename=original_filename,
            stored_filename=stored_filename,
            mime_type=candidate.mime_type,
            file_size=file_size,
            storage_ref=storage_ref,
            digest=digest,
            category=candidate.category.value,
            document_date=candidate.document_date,
            description=candidate.description,
            digitization_responsible=candidate.digitization_responsible,
            original_identifier=candidate.original_identifier,
            resolution_dpi=candidate.resolution_dpi,
            uploaded_by=candidate.uploaded_by,
        )
        try:
            async with self._uow_factory() as uow:
                document = await uow.documents.create_document(create_dto)
        except DuplicateDocumentException:
            logger.info("Concurrent duplicate for digest %s; discarding %s", digest, storage_ref)
            await self._discard_blob(storage_ref)
            raise
        except Exception:
            await self._discard_blob(storage_ref)
            raise
        logger.info(
            "Stored document %s for record %s (%d bytes)",
            document.id,
            medical_record_id,
            file_size,
        )
        return document

    async def _get_document(self, document_id: str) -> DocumentResult:
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        return document

    async def retrieve(
        self, document_id: str
    ) -> tuple[DocumentResult, AsyncIterator[bytes]]:
        """Return metadata and a byte stream of the stored file.

        Raises:
            ResourceNotFoundException: No such document.
            MissingBlobException: The row exists but its file does not.
        """
        document = await self._get_document(document_id)
        if not await self.storage.exists(document.storage_ref):
            logger.error(
                "Document %s has no file at %s", document.id, document.storage_ref
            )
            raise MissingBlobException(document.id, document.storage_ref)
        return document, self.storage.download(document.storage_ref)

    @traced("content_store.verify_integrity")
    async def verify_integrity(self, document_id: str) -> IntegrityResult:
        """Re-hash the stored file and compare with the recorded digest.

        Read-only. A missing or unreadable file is reported as invalid with
        current_digest None rather than raised.
        """
        document = await self._get_document(document_id)
        try:
            current = await self.hasher.hash_chunks(
                self.storage.download(document.storage_ref)
            )
        except StorageIOException:
            logger.warning(
                "Integrity check could not read %s for document %s",
                document.storage_ref,
                document.id,
                exc_info=True,
            )
            current = None
        valid = current is not None and current == document.digest
        if not valid:
            logger.warning(
                "Integrity check failed for document %s (stored %s, current %s)",
                document.id,
                document.digest,
                current,
            )
        return IntegrityResult(
            document_id=document.id,
            valid=valid,
            stored_digest=document.digest,
            current_digest=current,
        )

    @traced("content_store.delete")
    async def delete(self, document_id: str) -> DocumentResult:
        """Delete the row, then the file. A file that cannot be removed is logged, not raised."""
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if document is None:
                raise ResourceNotFoundException("document", document_id)
            await uow.documents.delete(document_id)
        await self.remove_files([document.storage_ref])
        return document

    async def remove_files(self, storage_refs: list[str]) -> int:
        """Remove files whose rows are already gone. Returns how many were removed."""
        removed = 0
        for ref in storage_refs:
            try:
                if await self.storage.delete(ref):
                    removed += 1
                else:
                    logger.warning("File %s was already missing", ref)
            except (StorageIOException, OSError):
                logger.warning("Could not remove file %s", ref, exc_info=True)
        return removed
