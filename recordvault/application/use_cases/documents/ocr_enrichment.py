"""OCR enrichment: extract text from image documents after they are committed.

Runs as a detached asyncio task so uploads never wait on the OCR engine.
The write-back only touches ocr_text/ocr_processed for one id, so running
it twice for the same document is harmless.
"""

from __future__ import annotations

import asyncio
import logging

from recordvault.application.dtos.document import DocumentResult
from recordvault.application.interfaces.repositories import UnitOfWorkFactory
from recordvault.application.interfaces.services import ITextExtractor
from recordvault.application.interfaces.storage import IStorageService
from recordvault.core.constants import OCR_MIME_TYPES

logger = logging.getLogger(__name__)

# Strong references so scheduled tasks are not garbage-collected mid-run.
_pending_tasks: set[asyncio.Task] = set()


async def drain_pending_tasks(timeout: float = 10.0) -> None:
    """Wait for scheduled enrichment tasks; cancel what is still running after timeout."""
    if not _pending_tasks:
        return
    tasks = list(_pending_tasks)
    _, still_running = await asyncio.wait(tasks, timeout=timeout)
    for task in still_running:
        task.cancel()
    if still_running:
        logger.warning("Cancelled %d pending OCR task(s) on shutdown", len(still_running))


class OcrEnrichmentService:
    """Schedules and runs OCR for image documents."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        storage: IStorageService,
        extractor: ITextExtractor,
        enabled: bool = True,
    ) -> None:
        self._uow_factory = uow_factory
        self.storage = storage
        self.extractor = extractor
        self.enabled = enabled

    def should_process(self, document: DocumentResult) -> bool:
        return (
            self.enabled
            and not document.ocr_processed
            and document.mime_type in OCR_MIME_TYPES
        )

    def schedule(self, document: DocumentResult) -> asyncio.Task | None:
        """Start enrichment in the background; returns the task, or None if not applicable."""
        if not self.should_process(document):
            return None
        task = asyncio.create_task(self.enrich(document.id), name=f"ocr:{document.id}")
        _pending_tasks.add(task)
        task.add_done_callback(_pending_tasks.discard)
        return task

    async def enrich(self, document_id: str) -> bool:
        """Extract and store text for one document. Returns True when text was written.

        Failures are logged; the document stays unprocessed and can be retried.
        """
        try:
            async with self._uow_factory() as uow:
                document = await uow.documents.get_by_id(document_id)
            if document is None:
                logger.info("OCR skipped: document %s no longer exists", document_id)
                return False
            if document.ocr_processed:
                return True
            content = bytearray()
            async for chunk in self.storage.download(document.storage_ref):
                content.extend(chunk)
            text = await self.extractor.extract_text(bytes(content), document.mime_type)
            async with self._uow_factory() as uow:
                written = await uow.documents.set_ocr_text(document_id, text)
            if written:
                logger.info(
                    "OCR stored for document %s (%d chars)", document_id, len(text or "")
                )
            return written
        except Exception:
            logger.warning("OCR enrichment failed for document %s", document_id, exc_info=True)
            return False
