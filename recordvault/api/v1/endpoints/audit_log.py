"""Audit log API: list audit entries (who did what, when)."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from recordvault.api.v1.dependencies import get_audit_query_service
from recordvault.application.services import AuditQueryService
from recordvault.schemas.audit_log import AuditLogEntryResponse, AuditLogListResponse
from recordvault.shared.enums import AuditAction, AuditEntityType

router = APIRouter()


@router.get("", response_model=AuditLogListResponse)
async def list_audit_log(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    user_id: str | None = Query(None, description="Filter by acting user id"),
    action: AuditAction | None = Query(None, description="Filter by action"),
    entity_type: AuditEntityType | None = Query(None, description="Filter by entity type"),
    entity_id: str | None = Query(None, description="Filter by entity id"),
    from_timestamp: datetime | None = Query(None, description="From (inclusive) ISO8601"),
    to_timestamp: datetime | None = Query(None, description="To (inclusive) ISO8601"),
    audit_svc: AuditQueryService = Depends(get_audit_query_service),
):
    """List audit entries, newest first (paginated, optional filters)."""
    items = await audit_svc.list(
        skip=skip,
        limit=limit,
        user_id=user_id,
        action=action.value if action else None,
        entity_type=entity_type.value if entity_type else None,
        entity_id=entity_id,
        from_timestamp=from_timestamp,
        to_timestamp=to_timestamp,
    )
    return AuditLogListResponse(
        items=[AuditLogEntryResponse.model_validate(e) for e in items],
        skip=skip,
        limit=limit,
    )
