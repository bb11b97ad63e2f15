"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, BinaryIO, Protocol

if TYPE_CHECKING:
    from collections.abc import AsyncIterable
    from pathlib import Path

    from recordvault.application.dtos.audit_log import AuditOrigin
    from recordvault.shared.enums import AuditAction, AuditEntityType


class IHashService(Protocol):
    """Protocol for content digests (pinned algorithm)."""

    @property
    def algorithm_name(self) -> str: ...

    def hash_bytes(self, data: bytes) -> str:
        """Digest of an in-memory buffer."""

    def new_hasher(self) -> Any:
        """Fresh incremental hasher (update/hexdigest)."""

    def hash_stream(self, stream: BinaryIO) -> str:
        """Digest of a stream read in chunks; rewinds seekable streams."""

    async def hash_chunks(self, chunks: AsyncIterable[bytes]) -> str:
        """Digest of an async byte stream."""

    def hash_file(self, path: str | Path) -> str:
        """Digest of a file on disk."""


class IAuditRecorder(Protocol):
    """Protocol for the best-effort audit trail."""

    async def record(
        self,
        actor_id: str | None,
        action: AuditAction,
        entity_type: AuditEntityType,
        entity_id: str | None,
        details: dict[str, Any] | None = None,
        origin: AuditOrigin | None = None,
    ) -> None:
        """Append one entry; never raises."""


class ITextExtractor(Protocol):
    """Protocol for the external OCR engine."""

    async def extract_text(self, content: bytes, mime_type: str) -> str | None:
        """Return recognized text, or None when nothing was recognized."""
