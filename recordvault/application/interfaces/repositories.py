"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain types only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import date, datetime
from types import TracebackType
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from recordvault.application.dtos.audit_log import (
        AuditEntryCreate,
        AuditEntryResult,
    )
    from recordvault.application.dtos.checklist import ChecklistResult
    from recordvault.application.dtos.document import DocumentCreate, DocumentResult
    from recordvault.application.dtos.medical_record import (
        MedicalRecordCreate,
        MedicalRecordResult,
    )
    from recordvault.domain.entities.checklist import ChecklistState


class IDocumentRepository(Protocol):
    """Protocol for document repository (DIP)."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by ID."""

    async def get_by_digest(self, digest: str) -> DocumentResult | None:
        """Return document holding this digest (any record)."""

    async def list_by_record(
        self, medical_record_id: str, *, skip: int = 0, limit: int | None = 100
    ) -> list[DocumentResult]:
        """Return documents of a record, oldest first (limit None = all)."""

    async def list_storage_refs(self) -> dict[str, str]:
        """Return storage_ref -> document id for every document."""

    async def create_document(self, document: DocumentCreate) -> DocumentResult:
        """Insert document row. Raises DuplicateDocumentException on digest collision."""

    async def delete(self, document_id: str) -> bool:
        """Delete document row. Returns False if absent."""

    async def set_ocr_text(self, document_id: str, text: str | None) -> bool:
        """Write OCR text and mark processed. Returns False if the row is gone."""


class IMedicalRecordRepository(Protocol):
    """Protocol for medical record repository (DIP)."""

    async def get_by_id(self, record_id: str) -> MedicalRecordResult | None:
        """Return record by ID (with document count)."""

    async def exists(self, record_id: str) -> bool:
        """Return True if the record exists."""

    async def list(
        self,
        *,
        patient_id: str | None = None,
        status: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[MedicalRecordResult]:
        """List records, newest first."""

    async def create(self, record: MedicalRecordCreate) -> MedicalRecordResult:
        """Insert record row."""

    async def update(self, record_id: str, **fields: Any) -> MedicalRecordResult | None:
        """Update given columns. Returns None if absent."""

    async def touch_activity(
        self, record_id: str, activity_at: datetime, retention_expiry: datetime | None
    ) -> bool:
        """Set last_activity_date and its derived expiry. Returns False if absent."""

    async def delete(self, record_id: str) -> bool:
        """Delete record row (documents and checklist cascade)."""

    async def list_expired(self, as_of: date) -> list[MedicalRecordResult]:
        """Records whose retention_expiry_date falls on or before as_of."""


class IChecklistRepository(Protocol):
    """Protocol for compliance checklist repository (DIP)."""

    async def get(self, medical_record_id: str) -> ChecklistResult | None:
        """Return persisted checklist for record."""

    async def get_state(self, medical_record_id: str) -> ChecklistState | None:
        """Return checklist as a domain state for update."""

    async def save(self, state: ChecklistState) -> ChecklistResult:
        """Insert or update the single checklist row for the record."""


class IAuditLogRepository(Protocol):
    """Protocol for audit log repository (DIP). Append-only."""

    async def create(self, entry: AuditEntryCreate) -> AuditEntryResult:
        """Append one audit entry; return created record."""

    async def list(
        self,
        *,
        skip: int = 0,
        limit: int = 100,
        user_id: str | None = None,
        action: str | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
    ) -> list[AuditEntryResult]:
        """List audit entries newest first with optional filters (paginated)."""


class IUnitOfWork(Protocol):
    """One transaction and the repositories bound to it.

    ``async with uow:`` opens the transaction; leaving the block commits on
    success and rolls back on exception.
    """

    documents: IDocumentRepository
    records: IMedicalRecordRepository
    checklists: IChecklistRepository
    audit_log: IAuditLogRepository

    async def __aenter__(self) -> IUnitOfWork: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Callable returning a fresh, unopened unit of work."""

    def __call__(self) -> IUnitOfWork: ...
