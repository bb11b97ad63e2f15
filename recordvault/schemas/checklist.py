"""Compliance checklist API schemas.

ChecklistUpdateRequest gets one optional strict boolean per item of
REQUIREMENT_CATALOG, in catalog order.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, create_model

from recordvault.domain.entities.checklist import ALL_ITEMS


class _ChecklistUpdateBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    notes: str | None = Field(default=None, max_length=5000)

    def item_values(self) -> dict[str, object]:
        """Items the client actually sent (an explicit null is passed on and rejected)."""
        sent = self.model_dump(exclude_unset=True)
        sent.pop("notes", None)
        return sent


ChecklistUpdateRequest = create_model(
    "ChecklistUpdateRequest",
    __base__=_ChecklistUpdateBase,
    __doc__="Request body for PUT /records/{id}/checklist. Items left out keep their value.",
    __module__=__name__,
    **{name: (StrictBool | None, None) for name in ALL_ITEMS},
)


class ChecklistResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    medical_record_id: str
    items: dict[str, bool]
    notes: str | None = None
    completed_by: str | None = None
    completed_at: datetime | None = None
    is_complete: bool
    completion_percentage: int
    missing_mandatory: list[str]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ChecklistStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    exists: bool
    completed: bool
    completion_percentage: int
    completed_count: int
    total_count: int


class ChecklistSuggestionResponse(BaseModel):
    """Items derivable from document metadata. Nothing is saved."""

    model_config = ConfigDict(from_attributes=True)

    medical_record_id: str
    document_count: int
    items: dict[str, bool]


class RequirementItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    field: str
    label: str
    mandatory: bool


class RequirementGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    title: str
    items: list[RequirementItemResponse]
