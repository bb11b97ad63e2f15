"""Persistence models: ORM entities and mixins."""

from recordvault.infrastructure.persistence.models.audit_log import AuditLog
from recordvault.infrastructure.persistence.models.checklist import (
    ComplianceChecklist,
)
from recordvault.infrastructure.persistence.models.document import Document
from recordvault.infrastructure.persistence.models.medical_record import (
    MedicalRecord,
)
from recordvault.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
)

__all__ = [
    "AuditLog",
    "ComplianceChecklist",
    "CuidMixin",
    "Document",
    "MedicalRecord",
    "TimestampMixin",
]
