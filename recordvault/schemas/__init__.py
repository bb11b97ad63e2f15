"""Pydantic request/response schemas for the API."""

from recordvault.schemas.audit_log import AuditLogEntryResponse, AuditLogListResponse
from recordvault.schemas.checklist import (
    ChecklistResponse,
    ChecklistStatusResponse,
    ChecklistSuggestionResponse,
    ChecklistUpdateRequest,
    RequirementGroupResponse,
    RequirementItemResponse,
)
from recordvault.schemas.document import (
    DocumentDetailResponse,
    DocumentListResponse,
    DocumentResponse,
    IntegrityResponse,
)
from recordvault.schemas.error import ErrorResponse
from recordvault.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from recordvault.schemas.record import (
    MedicalRecordCreateRequest,
    MedicalRecordResponse,
    MedicalRecordUpdateRequest,
)

__all__ = [
    "AuditLogEntryResponse",
    "AuditLogListResponse",
    "ChecklistResponse",
    "ChecklistStatusResponse",
    "ChecklistSuggestionResponse",
    "ChecklistUpdateRequest",
    "DocumentDetailResponse",
    "DocumentListResponse",
    "DocumentResponse",
    "ErrorResponse",
    "HealthResponse",
    "IntegrityResponse",
    "MedicalRecordCreateRequest",
    "MedicalRecordResponse",
    "MedicalRecordUpdateRequest",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "RequirementGroupResponse",
    "RequirementItemResponse",
]
