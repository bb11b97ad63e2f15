"""Checklist catalog API: the static requirement list, grouped by category."""

from fastapi import APIRouter

from recordvault.application.use_cases.checklists import requirement_catalog
from recordvault.schemas.checklist import RequirementGroupResponse

router = APIRouter()


@router.get("/requirements", response_model=list[RequirementGroupResponse])
def list_requirements() -> list[RequirementGroupResponse]:
    """All checklist items with labels and mandatory flags, in catalog order."""
    return [RequirementGroupResponse.model_validate(g) for g in requirement_catalog()]
