"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on infrastructure directly.
"""

from .audit import get_audit_query_service
from .document import (
    get_document_deletion_service,
    get_document_query_service,
    get_document_upload_service,
)
from .infra import (
    get_audit_recorder,
    get_content_store,
    get_hash_service,
    get_ocr_service,
    get_storage_service,
    get_uow_factory,
)
from .record import get_checklist_service, get_medical_record_service
from .request import get_audit_origin, get_current_actor

__all__ = [
    "get_audit_origin",
    "get_audit_query_service",
    "get_audit_recorder",
    "get_checklist_service",
    "get_content_store",
    "get_current_actor",
    "get_document_deletion_service",
    "get_document_query_service",
    "get_document_upload_service",
    "get_hash_service",
    "get_medical_record_service",
    "get_ocr_service",
    "get_storage_service",
    "get_uow_factory",
]
