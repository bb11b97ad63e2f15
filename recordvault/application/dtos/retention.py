"""DTOs for the retention review (records past their retention period)."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class RetentionCandidate:
    """A record whose retention period has ended."""

    medical_record_id: str
    patient_id: str
    last_activity_date: datetime | None
    retention_expiry_date: datetime


@dataclass(frozen=True)
class RetentionReviewResult:
    """Result of a retention review run. Nothing is deleted by the review."""

    as_of: date
    """Cut-off date the review was evaluated against."""

    candidates: list[RetentionCandidate] = field(default_factory=list)
    """Expired records without historical value, eligible for disposal review."""

    historical_kept: int = 0
    """Expired records kept because they are flagged as historical."""

    @property
    def total_candidates(self) -> int:
        return len(self.candidates)
