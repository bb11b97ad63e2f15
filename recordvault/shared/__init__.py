"""Shared utilities: enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from recordvault.shared.enums import AuditAction, AuditEntityType
from recordvault.shared.utils import (
    ensure_utc,
    from_timestamp_utc,
    generate_cuid,
    generate_stored_filename,
    utc_now,
)

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "generate_cuid",
    "generate_stored_filename",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
]
