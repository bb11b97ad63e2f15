"""Medical record API: record CRUD plus the record's compliance checklist."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from recordvault.api.v1.dependencies import (
    get_audit_origin,
    get_checklist_service,
    get_current_actor,
    get_medical_record_service,
)
from recordvault.application.dtos import AuditOrigin
from recordvault.application.use_cases.checklists import ChecklistService
from recordvault.application.use_cases.records import MedicalRecordService
from recordvault.core.limiter import limit_writes
from recordvault.domain.enums import RecordStatus
from recordvault.schemas.checklist import (
    ChecklistResponse,
    ChecklistStatusResponse,
    ChecklistSuggestionResponse,
    ChecklistUpdateRequest,
)
from recordvault.schemas.record import (
    MedicalRecordCreateRequest,
    MedicalRecordResponse,
    MedicalRecordUpdateRequest,
)

router = APIRouter()

Actor = Annotated[str | None, Depends(get_current_actor)]
Origin = Annotated[AuditOrigin, Depends(get_audit_origin)]


@router.post("", response_model=MedicalRecordResponse, status_code=201)
@limit_writes
async def create_record(
    request: Request,
    body: MedicalRecordCreateRequest,
    actor_id: Actor,
    origin: Origin,
    record_svc: MedicalRecordService = Depends(get_medical_record_service),
):
    """Create a medical record. retention_expiry_date follows from last_activity_date."""
    created = await record_svc.create(
        body.patient_id,
        actor_id,
        description=body.description,
        start_date=body.start_date,
        last_activity_date=body.last_activity_date,
        has_historical_value=body.has_historical_value,
        origin=origin,
    )
    return MedicalRecordResponse.model_validate(created)


@router.get("", response_model=list[MedicalRecordResponse])
async def list_records(
    patient_id: str | None = Query(None),
    status: RecordStatus | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    record_svc: MedicalRecordService = Depends(get_medical_record_service),
):
    """List records, newest first, optionally for one patient or status."""
    items = await record_svc.list(
        patient_id=patient_id,
        status=status.value if status else None,
        skip=skip,
        limit=limit,
    )
    return [MedicalRecordResponse.model_validate(r) for r in items]


@router.get("/{record_id}", response_model=MedicalRecordResponse)
async def get_record(
    record_id: str,
    actor_id: Actor,
    origin: Origin,
    record_svc: MedicalRecordService = Depends(get_medical_record_service),
):
    record = await record_svc.get(record_id, actor_id, origin)
    return MedicalRecordResponse.model_validate(record)


@router.put("/{record_id}", response_model=MedicalRecordResponse)
@limit_writes
async def update_record(
    request: Request,
    record_id: str,
    body: MedicalRecordUpdateRequest,
    actor_id: Actor,
    origin: Origin,
    record_svc: MedicalRecordService = Depends(get_medical_record_service),
):
    """Partial update: only fields present in the body change."""
    updated = await record_svc.update(
        record_id, actor_id, body.model_dump(exclude_unset=True), origin
    )
    return MedicalRecordResponse.model_validate(updated)


@router.delete("/{record_id}", status_code=204)
@limit_writes
async def delete_record(
    request: Request,
    record_id: str,
    actor_id: Actor,
    origin: Origin,
    record_svc: MedicalRecordService = Depends(get_medical_record_service),
) -> Response:
    """Delete the record with its documents (rows and files) and checklist."""
    await record_svc.delete(record_id, actor_id, origin)
    return Response(status_code=204)


@router.get("/{record_id}/checklist", response_model=ChecklistResponse)
async def get_checklist(
    record_id: str,
    actor_id: Actor,
    origin: Origin,
    checklist_svc: ChecklistService = Depends(get_checklist_service),
):
    """Return the checklist; all items false when none was saved yet."""
    result = await checklist_svc.get(record_id, actor_id, origin)
    return ChecklistResponse.model_validate(result)


@router.put("/{record_id}/checklist", response_model=ChecklistResponse)
@limit_writes
async def update_checklist(
    request: Request,
    record_id: str,
    body: ChecklistUpdateRequest,
    actor_id: Actor,
    origin: Origin,
    checklist_svc: ChecklistService = Depends(get_checklist_service),
):
    """Merge the sent items into the checklist; completion is recomputed."""
    result = await checklist_svc.upsert(
        record_id, actor_id, body.item_values(), body.notes, origin
    )
    return ChecklistResponse.model_validate(result)


@router.get("/{record_id}/checklist/status", response_model=ChecklistStatusResponse)
async def get_checklist_status(
    record_id: str,
    checklist_svc: ChecklistService = Depends(get_checklist_service),
):
    status = await checklist_svc.status(record_id)
    return ChecklistStatusResponse.model_validate(status)


@router.get(
    "/{record_id}/checklist/suggestions",
    response_model=ChecklistSuggestionResponse,
)
async def get_checklist_suggestions(
    record_id: str,
    checklist_svc: ChecklistService = Depends(get_checklist_service),
):
    """Items the stored document metadata already supports. Nothing is saved."""
    suggestion = await checklist_svc.suggest_from_documents(record_id)
    return ChecklistSuggestionResponse.model_validate(suggestion)
