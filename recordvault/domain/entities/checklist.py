"""Compliance checklist: requirement catalog and per-record state.

The catalog is the only place the items are listed. MANDATORY_ITEMS and
ALL_ITEMS and the API update schema are derived from it; the ORM columns
mirror it by name.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from recordvault.domain.enums import ChecklistCategory
from recordvault.domain.exceptions import ValidationException


@dataclass(frozen=True)
class RequirementItem:
    """One checklist requirement."""

    field: str
    label: str
    category: ChecklistCategory
    mandatory: bool


CATEGORY_TITLES: dict[ChecklistCategory, str] = {
    ChecklistCategory.TECHNICAL: "Technical requirements (Decreto 10.278/2020)",
    ChecklistCategory.SECURITY: "Security requirements",
    ChecklistCategory.METADATA: "Mandatory metadata (Decreto 10.278/2020, Anexo II)",
    ChecklistCategory.LEGAL: "Legal requirements (Lei 13.787/2018)",
}

REQUIREMENT_CATALOG: tuple[RequirementItem, ...] = (
    RequirementItem(
        "has_min_resolution", "Minimum resolution of 300 dpi",
        ChecklistCategory.TECHNICAL, True,
    ),
    RequirementItem(
        "has_correct_format", "Format PDF/A or PNG",
        ChecklistCategory.TECHNICAL, True,
    ),
    RequirementItem(
        "is_faithful_copy", "Faithful copy of the original",
        ChecklistCategory.TECHNICAL, True,
    ),
    RequirementItem(
        "is_legible", "Document is fully legible",
        ChecklistCategory.TECHNICAL, True,
    ),
    RequirementItem(
        "has_integrity_hash", "SHA-256 integrity hash generated",
        ChecklistCategory.SECURITY, True,
    ),
    RequirementItem(
        "has_access_control", "Access control in place",
        ChecklistCategory.SECURITY, False,
    ),
    RequirementItem(
        "has_backup", "Backup performed",
        ChecklistCategory.SECURITY, False,
    ),
    RequirementItem(
        "has_audit_log", "Audit log enabled",
        ChecklistCategory.SECURITY, False,
    ),
    RequirementItem(
        "has_responsible_name", "Name of the person responsible for digitization",
        ChecklistCategory.METADATA, True,
    ),
    RequirementItem(
        "has_digitization_date", "Date and place of digitization",
        ChecklistCategory.METADATA, True,
    ),
    RequirementItem(
        "has_original_id", "Identifier of the original document",
        ChecklistCategory.METADATA, True,
    ),
    RequirementItem(
        "has_file_hash", "File hash recorded",
        ChecklistCategory.METADATA, True,
    ),
    RequirementItem(
        "has_retention_period", "Retention period defined (20 years)",
        ChecklistCategory.LEGAL, True,
    ),
    RequirementItem(
        "has_historical_review", "Historical value review by committee",
        ChecklistCategory.LEGAL, False,
    ),
    RequirementItem(
        "has_patient_access_right", "Patient access right guaranteed",
        ChecklistCategory.LEGAL, False,
    ),
)

ALL_ITEMS: tuple[str, ...] = tuple(item.field for item in REQUIREMENT_CATALOG)
MANDATORY_ITEMS: tuple[str, ...] = tuple(
    item.field for item in REQUIREMENT_CATALOG if item.mandatory
)


def grouped_catalog() -> list[tuple[ChecklistCategory, list[RequirementItem]]]:
    """Return the catalog grouped by category, in catalog order."""
    groups: dict[ChecklistCategory, list[RequirementItem]] = {}
    for item in REQUIREMENT_CATALOG:
        groups.setdefault(item.category, []).append(item)
    return list(groups.items())


def completion_percentage(completed: int, total: int) -> int:
    """Integer percentage rounded half up (9/15 -> 60, 1/8 -> 13)."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


@dataclass
class ChecklistState:
    """Checklist values for one medical record.

    completed_at and completed_by are derived: both are stamped when every
    mandatory item becomes true, kept while they stay true, and cleared as
    soon as one is false.
    """

    medical_record_id: str
    items: dict[str, bool] = field(default_factory=dict)
    notes: str | None = None
    completed_by: str | None = None
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        unknown = set(self.items) - set(ALL_ITEMS)
        if unknown:
            raise ValidationException(
                f"Unknown checklist items: {', '.join(sorted(unknown))}",
                field="items",
            )
        self.items = {name: bool(self.items.get(name, False)) for name in ALL_ITEMS}

    @classmethod
    def blank(cls, medical_record_id: str) -> "ChecklistState":
        """All items false, never completed."""
        return cls(medical_record_id=medical_record_id)

    @property
    def is_complete(self) -> bool:
        return all(self.items[name] for name in MANDATORY_ITEMS)

    @property
    def completed_count(self) -> int:
        return sum(1 for value in self.items.values() if value)

    @property
    def total_count(self) -> int:
        return len(ALL_ITEMS)

    @property
    def completion_percentage(self) -> int:
        return completion_percentage(self.completed_count, self.total_count)

    @property
    def missing_mandatory(self) -> list[str]:
        return [name for name in MANDATORY_ITEMS if not self.items[name]]

    def apply(
        self,
        item_values: Mapping[str, object],
        actor_id: str | None,
        notes: str | None,
        now: datetime,
    ) -> None:
        """Merge item values and recompute the completion stamp.

        Validation runs on the whole input before anything is merged, so a
        rejected update leaves the state untouched. Items not supplied keep
        their current value; notes are replaced only when given.

        Raises:
            ValidationException: Unknown item name or non-boolean value.
        """
        for name, value in item_values.items():
            if name not in ALL_ITEMS:
                raise ValidationException(
                    f"Unknown checklist item: {name}", field=name
                )
            if not isinstance(value, bool):
                raise ValidationException(
                    f"Checklist item {name} must be a boolean", field=name
                )
        was_complete = self.completed_at is not None
        for name, value in item_values.items():
            self.items[name] = value
        if notes is not None:
            self.notes = notes
        if self.is_complete:
            if not was_complete:
                self.completed_at = now
                self.completed_by = actor_id
        else:
            self.completed_at = None
            self.completed_by = None
