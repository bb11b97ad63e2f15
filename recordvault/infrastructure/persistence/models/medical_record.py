"""Medical record ORM model. Groups a patient's digitized documents."""

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from recordvault.domain.enums import RecordStatus
from recordvault.infrastructure.persistence.database import Base
from recordvault.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
)


class MedicalRecord(CuidMixin, TimestampMixin, Base):
    """Medical record. Table: medical_record.

    retention_expiry_date is always last_activity_date plus the retention
    period; the application layer keeps the two in step.
    """

    __tablename__ = "medical_record"

    patient_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    last_activity_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    retention_expiry_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    has_historical_value: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=RecordStatus.ACTIVE.value
    )

    __table_args__ = (
        Index("ix_medical_record_patient_status", "patient_id", "status"),
    )
