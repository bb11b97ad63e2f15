"""Medical record API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from recordvault.domain.enums import RecordStatus


class MedicalRecordCreateRequest(BaseModel):
    """Request body for POST /records. retention_expiry_date is derived, never sent."""

    model_config = ConfigDict(extra="forbid")

    patient_id: str = Field(..., min_length=1, max_length=128)
    description: str | None = Field(default=None, max_length=5000)
    start_date: date | None = None
    last_activity_date: datetime | None = None
    has_historical_value: bool = False


class MedicalRecordUpdateRequest(BaseModel):
    """Request body for PUT /records/{id}. Only fields that are sent are changed."""

    model_config = ConfigDict(extra="forbid")

    description: str | None = Field(default=None, max_length=5000)
    start_date: date | None = None
    last_activity_date: datetime | None = None
    has_historical_value: bool | None = None
    status: RecordStatus | None = None


class MedicalRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    patient_id: str
    description: str | None = None
    start_date: date | None = None
    last_activity_date: datetime | None = None
    retention_expiry_date: datetime | None = None
    has_historical_value: bool
    status: str
    document_count: int = 0
    created_at: datetime
    updated_at: datetime | None = None
