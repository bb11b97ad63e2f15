"""Document API: thin routes delegating to the document upload, query and deletion services."""

from datetime import date
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, Request, Response, UploadFile
from fastapi.responses import StreamingResponse

from recordvault.api.v1.dependencies import (
    get_audit_origin,
    get_current_actor,
    get_document_deletion_service,
    get_document_query_service,
    get_document_upload_service,
)
from recordvault.application.dtos import AuditOrigin, UploadCandidate
from recordvault.application.use_cases.documents import (
    DocumentDeletionService,
    DocumentQueryService,
    DocumentUploadService,
)
from recordvault.core.limiter import limit_upload, limit_writes
from recordvault.domain.enums import DocumentCategory
from recordvault.schemas.document import (
    DocumentDetailResponse,
    DocumentListResponse,
    DocumentResponse,
    IntegrityResponse,
)

router = APIRouter()

Actor = Annotated[str | None, Depends(get_current_actor)]
Origin = Annotated[AuditOrigin, Depends(get_audit_origin)]


def _content_disposition(filename: str) -> str:
    return f"attachment; filename*=UTF-8''{quote(filename)}"


@router.post("", response_model=DocumentResponse, status_code=201)
@limit_upload
async def upload_document(
    request: Request,
    actor_id: Actor,
    origin: Origin,
    medical_record_id: str = Form(...),
    file: UploadFile = File(...),
    category: DocumentCategory = Form(DocumentCategory.OTHER),
    document_date: date | None = Form(None),
    description: str | None = Form(None),
    digitization_responsible: str | None = Form(None),
    original_identifier: str | None = Form(None),
    resolution_dpi: int | None = Form(None),
    upload_svc: DocumentUploadService = Depends(get_document_upload_service),
):
    """Upload a file into a medical record. 409 if identical content is already stored."""
    candidate = UploadCandidate(
        original_filename=file.filename or "",
        mime_type=file.content_type or "",
        stream=file.file,
        size=file.size,
        category=category,
        document_date=document_date,
        description=description,
        digitization_responsible=digitization_responsible,
        original_identifier=original_identifier,
        resolution_dpi=resolution_dpi,
        uploaded_by=actor_id,
    )
    created = await upload_svc.upload(medical_record_id, candidate, origin)
    return DocumentResponse.model_validate(created)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    medical_record_id: str,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    """List documents of a medical record, oldest first. medical_record_id is required."""
    items = await query_svc.list_for_record(medical_record_id, skip=skip, limit=limit)
    return DocumentListResponse(
        items=[DocumentResponse.model_validate(d) for d in items],
        skip=skip,
        limit=limit,
    )


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    actor_id: Actor,
    origin: Origin,
    query_svc: DocumentQueryService = Depends(get_document_query_service),
) -> StreamingResponse:
    """Stream the stored file. 500 MISSING_BLOB when the row exists but the file is gone."""
    document, chunks = await query_svc.download(document_id, actor_id, origin)
    return StreamingResponse(
        chunks,
        media_type=document.mime_type,
        headers={
            "Content-Disposition": _content_disposition(document.original_filename),
            "X-Content-SHA256": document.digest,
        },
    )


@router.get("/{document_id}/verify", response_model=IntegrityResponse)
async def verify_document(
    document_id: str,
    actor_id: Actor,
    origin: Origin,
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    """Re-hash the stored file and compare with the recorded digest."""
    result = await query_svc.verify(document_id, actor_id, origin)
    return IntegrityResponse.model_validate(result)


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    document_id: str,
    actor_id: Actor,
    origin: Origin,
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    """Get document metadata by id."""
    document = await query_svc.get_metadata(document_id, actor_id, origin)
    return DocumentDetailResponse.model_validate(document)


@router.delete("/{document_id}", status_code=204)
@limit_writes
async def delete_document(
    request: Request,
    document_id: str,
    actor_id: Actor,
    origin: Origin,
    deletion_svc: DocumentDeletionService = Depends(get_document_deletion_service),
) -> Response:
    """Delete the document row, then its file (a file that cannot be removed is only logged)."""
    await deletion_svc.delete(document_id, actor_id, origin)
    return Response(status_code=204)
