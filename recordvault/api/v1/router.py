"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from recordvault.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from recordvault.api.v1.endpoints import (
    audit_log,
    checklist,
    documents,
    health,
    records,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(records.router, prefix="/records", tags=["records"])
api_router.include_router(checklist.router, prefix="/checklist", tags=["checklist"])
api_router.include_router(audit_log.router, prefix="/audit-log", tags=["audit-log"])
