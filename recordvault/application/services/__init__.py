"""Application services: hashing, retention, audit."""

from recordvault.application.services.audit_recorder import (
    AuditQueryService,
    AuditRecorder,
)
from recordvault.application.services.hash_service import (
    HashAlgorithm,
    HashService,
    SHA256Algorithm,
)
from recordvault.application.services.retention_calculator import (
    add_years,
    expiry_of,
    is_expired,
)

__all__ = [
    "AuditQueryService",
    "AuditRecorder",
    "HashAlgorithm",
    "HashService",
    "SHA256Algorithm",
    "add_years",
    "expiry_of",
    "is_expired",
]
