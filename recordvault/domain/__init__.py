"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from recordvault.domain.entities import ChecklistState, RequirementItem
from recordvault.domain.enums import ChecklistCategory, DocumentCategory, RecordStatus
from recordvault.domain.exceptions import (
    AuditWriteFailure,
    DuplicateDocumentException,
    MissingBlobException,
    RecordVaultException,
    ResourceNotFoundException,
    StorageIOException,
    ValidationException,
)
from recordvault.domain.value_objects import Digest

__all__ = [
    # Entities
    "ChecklistState",
    "RequirementItem",
    # Enums
    "ChecklistCategory",
    "DocumentCategory",
    "RecordStatus",
    # Exceptions
    "AuditWriteFailure",
    "DuplicateDocumentException",
    "MissingBlobException",
    "RecordVaultException",
    "ResourceNotFoundException",
    "StorageIOException",
    "ValidationException",
    # Value objects
    "Digest",
]
