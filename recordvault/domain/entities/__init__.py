"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from recordvault.domain.entities.checklist import (
    ALL_ITEMS,
    MANDATORY_ITEMS,
    REQUIREMENT_CATALOG,
    ChecklistState,
    RequirementItem,
)

__all__ = [
    "ALL_ITEMS",
    "MANDATORY_ITEMS",
    "REQUIREMENT_CATALOG",
    "ChecklistState",
    "RequirementItem",
]
