"""DTOs for storage/metadata reconciliation."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MissingBlob:
    """A document row whose file is not in storage."""

    document_id: str
    storage_ref: str


@dataclass(frozen=True)
class ReconciliationReport:
    """Differences between the blob store and document metadata."""

    orphan_files: list[str] = field(default_factory=list)
    """Storage refs under the records namespace with no document row."""

    missing_blobs: list[MissingBlob] = field(default_factory=list)

    removed_orphans: list[str] = field(default_factory=list)
    """Orphans deleted in this run (only when removal was requested)."""

    @property
    def is_consistent(self) -> bool:
        return not self.orphan_files and not self.missing_blobs
