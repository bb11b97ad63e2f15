"""DTOs for medical record use cases."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class MedicalRecordCreate:
    """Input for creating a medical record row. retention_expiry_date is already derived."""

    id: str
    patient_id: str
    description: str | None
    start_date: date | None
    last_activity_date: datetime | None
    retention_expiry_date: datetime | None
    has_historical_value: bool
    status: str


@dataclass(frozen=True)
class MedicalRecordResult:
    """Medical record read-model."""

    id: str
    patient_id: str
    description: str | None
    start_date: date | None
    last_activity_date: datetime | None
    retention_expiry_date: datetime | None
    has_historical_value: bool
    status: str
    created_at: datetime
    updated_at: datetime | None
    document_count: int = 0
