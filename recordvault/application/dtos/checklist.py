"""DTOs for the compliance checklist."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recordvault.domain.entities.checklist import ChecklistState


@dataclass(frozen=True)
class ChecklistResult:
    """Persisted checklist with derived completion figures."""

    medical_record_id: str
    items: dict[str, bool]
    notes: str | None
    completed_by: str | None
    completed_at: datetime | None
    is_complete: bool
    completion_percentage: int
    missing_mandatory: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_state(
        cls,
        state: ChecklistState,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> ChecklistResult:
        return cls(
            medical_record_id=state.medical_record_id,
            items=dict(state.items),
            notes=state.notes,
            completed_by=state.completed_by,
            completed_at=state.completed_at,
            is_complete=state.is_complete,
            completion_percentage=state.completion_percentage,
            missing_mandatory=state.missing_mandatory,
            created_at=created_at,
            updated_at=updated_at,
        )


@dataclass(frozen=True)
class ChecklistStatus:
    """Completion summary; exists is False when no checklist was ever saved."""

    exists: bool
    completed: bool
    completion_percentage: int
    completed_count: int
    total_count: int


@dataclass(frozen=True)
class ChecklistSuggestion:
    """Item values derivable from stored document metadata. Never persisted."""

    medical_record_id: str
    document_count: int
    items: dict[str, bool]


@dataclass(frozen=True)
class RequirementView:
    """One catalog item as exposed to clients."""

    field: str
    label: str
    mandatory: bool


@dataclass(frozen=True)
class RequirementGroup:
    """Catalog items of one regulatory category."""

    category: str
    title: str
    items: list[RequirementView]
