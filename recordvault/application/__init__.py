"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, storage, unit of work).
"""

from recordvault.application.interfaces import (
    IAuditLogRepository,
    IAuditRecorder,
    IChecklistRepository,
    IDocumentRepository,
    IHashService,
    IMedicalRecordRepository,
    IStorageService,
    ITextExtractor,
    IUnitOfWork,
    UnitOfWorkFactory,
)
from recordvault.application.services.hash_service import HashService

__all__ = [
    "HashService",
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
