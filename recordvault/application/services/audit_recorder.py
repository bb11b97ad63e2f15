"""Audit recorder: best-effort, append-only audit trail.

Each entry is written in its own unit of work, after the audited operation
has committed. A failure to audit never fails the operation; it is logged
as AuditWriteFailure and dropped.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from recordvault.application.dtos.audit_log import (
    AuditEntryCreate,
    AuditEntryResult,
    AuditOrigin,
)
from recordvault.application.interfaces.repositories import UnitOfWorkFactory
from recordvault.domain.exceptions import AuditWriteFailure
from recordvault.shared.enums import AuditAction, AuditEntityType

logger = logging.getLogger(__name__)

_NO_ORIGIN = AuditOrigin()


class AuditRecorder:
    """Appends audit entries (IAuditRecorder)."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def record(
        self,
        actor_id: str | None,
        action: AuditAction,
        entity_type: AuditEntityType,
        entity_id: str | None,
        details: dict[str, Any] | None = None,
        origin: AuditOrigin | None = None,
    ) -> None:
        """Append one entry. Never raises."""
        origin = origin or _NO_ORIGIN
        try:
            entry = AuditEntryCreate(
                user_id=actor_id,
                action=AuditAction(action).value,
                entity_type=AuditEntityType(entity_type).value,
                entity_id=entity_id,
                details=details,
                ip_address=origin.ip_address,
                user_agent=origin.user_agent,
                request_id=origin.request_id,
            )
            async with self._uow_factory() as uow:
                await uow.audit_log.create(entry)
        except Exception as e:
            failure = AuditWriteFailure(
                getattr(action, "value", str(action)),
                getattr(entity_type, "value", str(entity_type)),
                e,
            )
            logger.warning(
                "%s (entity_id=%s): %s",
                failure.error_code,
                entity_id,
                failure.message,
                exc_info=True,
            )


class AuditQueryService:
    """Read-only listing of the audit trail."""

    MAX_PAGE_SIZE = 500

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

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
        limit = max(1, min(limit, self.MAX_PAGE_SIZE))
        async with self._uow_factory() as uow:
            return await uow.audit_log.list(
                skip=max(0, skip),
                limit=limit,
                user_id=user_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                from_timestamp=from_timestamp,
                to_timestamp=to_timestamp,
            )
