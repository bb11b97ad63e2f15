"""Storage reconciliation: compare stored files with document metadata.

Finds orphan files (written, but their row never committed) and missing
blobs (row without a file). Reports only, unless orphan removal is asked
for. Recently written files are skipped as they may belong to an upload
that is still in flight.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from recordvault.application.dtos.reconciliation import MissingBlob, ReconciliationReport
from recordvault.application.interfaces.repositories import UnitOfWorkFactory
from recordvault.application.interfaces.storage import IStorageService
from recordvault.core.constants import RECORDS_NAMESPACE
from recordvault.domain.exceptions import StorageIOException
from recordvault.shared.telemetry.tracing import traced
from recordvault.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_GRACE_PERIOD = timedelta(minutes=15)


class StorageReconciliationUseCase:
    """Report (and optionally remove) storage/metadata mismatches."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        storage: IStorageService,
        grace_period: timedelta = DEFAULT_GRACE_PERIOD,
    ) -> None:
        self._uow_factory = uow_factory
        self.storage = storage
        self.grace_period = grace_period

    async def _is_recent(self, storage_ref: str, now: datetime) -> bool:
        if self.grace_period <= timedelta(0):
            return False
        try:
            meta = await self.storage.get_metadata(storage_ref)
        except StorageIOException:
            return False
        modified = datetime.fromisoformat(meta["last_modified"])
        return now - modified < self.grace_period

    @traced("reconciliation.run")
    async def run(self, remove_orphans: bool = False) -> ReconciliationReport:
        """Scan storage and metadata.

        Args:
            remove_orphans: Delete orphan files older than the grace period.

        Returns:
            Orphan files, missing blobs and the orphans removed in this run.
        """
        async with self._uow_factory() as uow:
            ref_to_document = await uow.documents.list_storage_refs()

        now = utc_now()
        stored: set[str] = set()
        orphans: list[str] = []
        async for ref in self.storage.list_refs(RECORDS_NAMESPACE):
            stored.add(ref)
            if ref not in ref_to_document and not await self._is_recent(ref, now):
                orphans.append(ref)
        orphans.sort()

        missing = [
            MissingBlob(document_id=document_id, storage_ref=ref)
            for ref, document_id in sorted(ref_to_document.items())
            if ref not in stored
        ]

        removed: list[str] = []
        if remove_orphans:
            for ref in orphans:
                try:
                    if await self.storage.delete(ref):
                        removed.append(ref)
                except StorageIOException:
                    logger.warning("Could not remove orphan %s", ref, exc_info=True)

        logger.info(
            "Reconciliation: %d file(s), %d row(s), %d orphan(s), %d missing, %d removed",
            len(stored),
            len(ref_to_document),
            len(orphans),
            len(missing),
            len(removed),
        )
        return ReconciliationReport(
            orphan_files=orphans,
            missing_blobs=missing,
            removed_orphans=removed,
        )
