"""DTOs for document use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import BinaryIO

from recordvault.domain.enums import DocumentCategory


@dataclass(frozen=True)
class UploadCandidate:
    """An uploaded file not yet accepted into the content store.

    stream is the spooled request body. size is what the transport reported;
    it is only used when the stream cannot seek, otherwise the stream is
    measured.
    """

    original_filename: str
    mime_type: str
    stream: BinaryIO
    size: int | None = None
    category: DocumentCategory = DocumentCategory.OTHER
    document_date: date | None = None
    description: str | None = None
    digitization_responsible: str | None = None
    original_identifier: str | None = None
    resolution_dpi: int | None = None
    uploaded_by: str | None = None


@dataclass(frozen=True)
class DocumentCreate:
    """Input for creating a document row (write-model). Content store builds this; repo persists and returns DocumentResult."""

    id: str
    medical_record_id: str
    original_filename: str
    stored_filename: str
    mime_type: str
    file_size: int
    storage_ref: str
    digest: str
    category: str
    document_date: date | None
    description: str | None
    digitization_responsible: str | None
    original_identifier: str | None
    resolution_dpi: int | None
    uploaded_by: str | None


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model (result of get_by_id, list_by_record, get_by_digest, create)."""

    id: str
    medical_record_id: str
    original_filename: str
    stored_filename: str
    mime_type: str
    file_size: int
    storage_ref: str
    digest: str
    category: str
    document_date: date | None
    description: str | None
    digitization_responsible: str | None
    original_identifier: str | None
    resolution_dpi: int | None
    uploaded_by: str | None
    created_at: datetime
    ocr_text: str | None = None
    ocr_processed: bool = False


@dataclass(frozen=True)
class IntegrityResult:
    """Outcome of re-hashing a stored file against its recorded digest."""

    document_id: str
    valid: bool
    stored_digest: str
    current_digest: str | None
