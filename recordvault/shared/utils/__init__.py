"""Shared utilities: datetime, generators, sanitization."""

from recordvault.shared.utils.datetime import (
    ensure_utc,
    from_timestamp_utc,
    utc_now,
)
from recordvault.shared.utils.generators import generate_cuid, generate_stored_filename
from recordvault.shared.utils.sanitization import (
    InputSanitizer,
    sanitize_filename,
    sanitize_text,
)

__all__ = [
    "generate_cuid",
    "generate_stored_filename",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
    "InputSanitizer",
    "sanitize_filename",
    "sanitize_text",
]
