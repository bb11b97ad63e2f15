"""Retention review: records whose legal retention period has ended.

Records flagged with historical value are kept permanently (Lei 13.787/2018,
art. 6) and are only counted. Nothing is deleted here; disposal is a
separate, human decision.
"""

from __future__ import annotations

import logging
from datetime import date

from recordvault.application.dtos.retention import (
    RetentionCandidate,
    RetentionReviewResult,
)
from recordvault.application.interfaces.repositories import UnitOfWorkFactory
from recordvault.shared.utils.datetime import utc_today

logger = logging.getLogger(__name__)


class RetentionReviewUseCase:
    """Lists expired, non-historical records for disposal review."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def run(self, as_of: date | None = None) -> RetentionReviewResult:
        """Evaluate retention as of a date (default: today, UTC)."""
        as_of = as_of or utc_today()
        async with self._uow_factory() as uow:
            expired = await uow.records.list_expired(as_of)

        candidates: list[RetentionCandidate] = []
        historical_kept = 0
        for record in expired:
            if record.has_historical_value:
                historical_kept += 1
                continue
            if record.retention_expiry_date is None:
                continue
            candidates.append(
                RetentionCandidate(
                    medical_record_id=record.id,
                    patient_id=record.patient_id,
                    last_activity_date=record.last_activity_date,
                    retention_expiry_date=record.retention_expiry_date,
                )
            )
        logger.info(
            "Retention review as of %s: %d candidate(s), %d historical kept",
            as_of.isoformat(),
            len(candidates),
            historical_kept,
        )
        return RetentionReviewResult(
            as_of=as_of,
            candidates=candidates,
            historical_kept=historical_kept,
        )
