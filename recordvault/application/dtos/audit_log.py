"""DTOs for the audit trail."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditOrigin:
    """Where an audited call came from (built by the HTTP adapter from the request)."""

    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None


@dataclass(frozen=True)
class AuditEntryCreate:
    """Input for appending one audit entry. Append-only; no update."""

    user_id: str | None
    action: str
    entity_type: str
    entity_id: str | None
    details: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    request_id: str | None


@dataclass(frozen=True)
class AuditEntryResult:
    """Single audit entry (read-model for list)."""

    id: str
    user_id: str | None
    action: str
    entity_type: str
    entity_id: str | None
    details: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    request_id: str | None
    timestamp: datetime
