"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from recordvault.infrastructure or recordvault.api.
"""

from recordvault.application.interfaces.repositories import (
    IAuditLogRepository,
    IChecklistRepository,
    IDocumentRepository,
    IMedicalRecordRepository,
    IUnitOfWork,
    UnitOfWorkFactory,
)
from recordvault.application.interfaces.services import (
    IAuditRecorder,
    IHashService,
    ITextExtractor,
)
from recordvault.application.interfaces.storage import IStorageService

__all__ = [
    "IAuditLogRepository",
    "IAuditRecorder",
    "IChecklistRepository",
    "IDocumentRepository",
    "IHashService",
    "IMedicalRecordRepository",
    "IStorageService",
    "ITextExtractor",
    "IUnitOfWork",
    "UnitOfWorkFactory",
]
