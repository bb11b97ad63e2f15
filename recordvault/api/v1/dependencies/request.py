"""Request-derived dependencies: acting user and audit origin."""

from __future__ import annotations

from fastapi import Request

from recordvault.application.dtos.audit_log import AuditOrigin
from recordvault.core.config import get_settings
from recordvault.shared.request_audit import get_actor_id, get_audit_request_context


def get_current_actor(request: Request) -> str | None:
    """Acting user id from the identity header (None when absent)."""
    return get_actor_id(request, get_settings().actor_header_name)


def get_audit_origin(request: Request) -> AuditOrigin:
    """IP, user agent and request id for audit entries."""
    request_id, ip_address, user_agent = get_audit_request_context(request)
    return AuditOrigin(
        ip_address=ip_address,
        user_agent=user_agent,
        request_id=request_id,
    )
