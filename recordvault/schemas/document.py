"""Document API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class DocumentResponse(BaseModel):
    """Stored document metadata. storage_ref stays internal."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    medical_record_id: str
    original_filename: str
    stored_filename: str
    mime_type: str
    file_size: int
    digest: str
    category: str
    document_date: date | None = None
    description: str | None = None
    digitization_responsible: str | None = None
    original_identifier: str | None = None
    resolution_dpi: int | None = None
    uploaded_by: str | None = None
    created_at: datetime
    ocr_processed: bool = False


class DocumentDetailResponse(DocumentResponse):
    """Single document, including recognized text when OCR has run."""

    ocr_text: str | None = None


class DocumentListResponse(BaseModel):
    """Documents of one record, oldest first."""

    items: list[DocumentResponse]
    skip: int
    limit: int


class IntegrityResponse(BaseModel):
    """Result of GET /documents/{id}/verify."""

    model_config = ConfigDict(from_attributes=True)

    document_id: str
    valid: bool
    stored_digest: str
    current_digest: str | None = None
