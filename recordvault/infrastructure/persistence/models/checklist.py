"""Compliance checklist ORM model. One row per medical record.

Boolean columns mirror the requirement catalog in
recordvault.domain.entities.checklist; the repository maps them by name.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from recordvault.infrastructure.persistence.database import Base
from recordvault.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
)


def _flag() -> Mapped[bool]:
    return mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )


class ComplianceChecklist(CuidMixin, TimestampMixin, Base):
    """Checklist values. Table: compliance_checklist."""

    __tablename__ = "compliance_checklist"

    medical_record_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("medical_record.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    # technical
    has_min_resolution: Mapped[bool] = _flag()
    has_correct_format: Mapped[bool] = _flag()
    is_faithful_copy: Mapped[bool] = _flag()
    is_legible: Mapped[bool] = _flag()
    # security
    has_integrity_hash: Mapped[bool] = _flag()
    has_access_control: Mapped[bool] = _flag()
    has_backup: Mapped[bool] = _flag()
    has_audit_log: Mapped[bool] = _flag()
    # metadata
    has_responsible_name: Mapped[bool] = _flag()
    has_digitization_date: Mapped[bool] = _flag()
    has_original_id: Mapped[bool] = _flag()
    has_file_hash: Mapped[bool] = _flag()
    # legal
    has_retention_period: Mapped[bool] = _flag()
    has_historical_review: Mapped[bool] = _flag()
    has_patient_access_right: Mapped[bool] = _flag()

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_by: Mapped[str | None] = mapped_column(String, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
