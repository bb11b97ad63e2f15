"""Medical record use cases: record CRUD and retention review."""

from recordvault.application.use_cases.records.record_operations import (
    MedicalRecordService,
)
from recordvault.application.use_cases.records.retention_review import (
    RetentionReviewUseCase,
)

__all__ = ["MedicalRecordService", "RetentionReviewUseCase"]
