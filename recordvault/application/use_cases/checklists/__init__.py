"""Checklist use cases."""

from recordvault.application.use_cases.checklists.checklist_operations import (
    ChecklistService,
    requirement_catalog,
)

__all__ = ["ChecklistService", "requirement_catalog"]
