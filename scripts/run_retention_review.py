"""List medical records whose 20-year retention period has ended.

Usage:
    python -m scripts.run_retention_review [YYYY-MM-DD]
The date defaults to today (UTC). Records flagged as historical are counted
but not listed. Nothing is deleted; disposal is a committee decision.
"""

import asyncio
import sys
from datetime import date

import recordvault.infrastructure.persistence.database as database
from recordvault.application.use_cases.records import RetentionReviewUseCase
from recordvault.infrastructure.persistence.unit_of_work import make_uow_factory
from recordvault.shared.telemetry import setup_logging


async def main() -> None:
    setup_logging()
    as_of: date | None = None
    if len(sys.argv) > 1:
        try:
            as_of = date.fromisoformat(sys.argv[1])
        except ValueError:
            print(f"Invalid date (expected YYYY-MM-DD): {sys.argv[1]}", file=sys.stderr)
            sys.exit(2)

    use_case = RetentionReviewUseCase(make_uow_factory(database.get_session_factory()))
    try:
        result = await use_case.run(as_of=as_of)
    finally:
        await database.engine.dispose()

    for candidate in result.candidates:
        print(
            f"{candidate.medical_record_id}\tpatient={candidate.patient_id}\t"
            f"expired={candidate.retention_expiry_date.date().isoformat()}"
        )
    print(
        f"Done. As of {result.as_of.isoformat()}: {result.total_candidates} record(s) "
        f"eligible for disposal review, {result.historical_kept} kept as historical"
    )


if __name__ == "__main__":
    asyncio.run(main())
