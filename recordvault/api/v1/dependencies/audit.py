"""Audit trail query dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from recordvault.application.interfaces import UnitOfWorkFactory
from recordvault.application.services import AuditQueryService

from .infra import get_uow_factory


def get_audit_query_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> AuditQueryService:
    """Read-only audit listing. Writes go through AuditRecorder only."""
    return AuditQueryService(uow_factory)
