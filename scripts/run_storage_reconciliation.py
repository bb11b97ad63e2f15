"""Report mismatches between stored files and document rows.

Usage:
    python -m scripts.run_storage_reconciliation [--remove-orphans]
Orphan files (no document row) are listed; with --remove-orphans they are
deleted. Documents whose file is missing are listed only, never changed.
Exit status is 1 when anything is inconsistent, so cron can alert on it.
"""

import asyncio
import sys

import recordvault.infrastructure.persistence.database as database
from recordvault.application.use_cases.documents import StorageReconciliationUseCase
from recordvault.infrastructure.external.storage.factory import StorageFactory
from recordvault.infrastructure.persistence.unit_of_work import make_uow_factory
from recordvault.shared.telemetry import setup_logging


async def main() -> int:
    setup_logging()
    remove_orphans = "--remove-orphans" in sys.argv[1:]
    use_case = StorageReconciliationUseCase(
        uow_factory=make_uow_factory(database.get_session_factory()),
        storage=StorageFactory.create_storage_service(),
    )
    try:
        report = await use_case.run(remove_orphans=remove_orphans)
    finally:
        await database.engine.dispose()

    for ref in report.orphan_files:
        print(f"orphan file: {ref}")
    for missing in report.missing_blobs:
        print(f"missing file: document {missing.document_id} -> {missing.storage_ref}")
    if remove_orphans:
        print(f"Removed {report.removed_orphans} orphan file(s)")
    print(
        f"Done. {len(report.orphan_files)} orphan file(s), "
        f"{len(report.missing_blobs)} missing file(s)"
    )
    return 0 if report.is_consistent else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
