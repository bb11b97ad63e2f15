"""Shared helpers for audit logging: derive request metadata from Starlette Request."""

from __future__ import annotations

from starlette.requests import Request


def get_audit_request_context(request: Request) -> tuple[str | None, str | None, str | None]:
    """Return (request_id, ip_address, user_agent) for audit log entries.

    Single source of truth for deriving client identity from the request:
    request_id from request state, IP from X-Forwarded-For (first hop) or
    request.client.host, user_agent from header.
    """
    request_id = getattr(request.state, "request_id", None)
    client_host = request.client.host if request.client else None
    forwarded = request.headers.get("X-Forwarded-For")
    ip_address = (
        (forwarded.split(",")[0].strip() if forwarded else None) or client_host
    )
    user_agent = request.headers.get("User-Agent")
    return (request_id, ip_address, user_agent)


def get_actor_id(request: Request, header_name: str) -> str | None:
    """Return the acting user's id from the identity header set by the auth proxy."""
    value = request.headers.get(header_name)
    if value is None:
        return None
    value = value.strip()
    return value or None
