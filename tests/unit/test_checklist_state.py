"""Tests for the requirement catalog and ChecklistState completion rules."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from recordvault.domain.entities.checklist import (
    ALL_ITEMS,
    MANDATORY_ITEMS,
    REQUIREMENT_CATALOG,
    ChecklistState,
    completion_percentage,
    grouped_catalog,
)
from recordvault.domain.enums import ChecklistCategory
from recordvault.domain.exceptions import ValidationException
from recordvault.infrastructure.persistence.models import ComplianceChecklist
from recordvault.schemas.checklist import ChecklistUpdateRequest

T0 = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


def _all_mandatory() -> dict[str, bool]:
    return {name: True for name in MANDATORY_ITEMS}


class TestCatalog:
    def test_fifteen_items_ten_mandatory(self) -> None:
        assert len(ALL_ITEMS) == 15
        assert len(MANDATORY_ITEMS) == 10

    def test_groups_in_catalog_order(self) -> None:
        categories = [category for category, _ in grouped_catalog()]
        assert categories == [
            ChecklistCategory.TECHNICAL,
            ChecklistCategory.SECURITY,
            ChecklistCategory.METADATA,
            ChecklistCategory.LEGAL,
        ]

    def test_field_names_unique(self) -> None:
        assert len({item.field for item in REQUIREMENT_CATALOG}) == len(REQUIREMENT_CATALOG)

    def test_update_request_lists_every_item(self) -> None:
        fields = [f for f in ChecklistUpdateRequest.model_fields if f != "notes"]
        assert fields == list(ALL_ITEMS)

    def test_update_request_items_are_strict_booleans(self) -> None:
        assert ChecklistUpdateRequest(is_legible=True).item_values() == {"is_legible": True}
        with pytest.raises(ValidationError):
            ChecklistUpdateRequest(is_legible="yes")
        with pytest.raises(ValidationError):
            ChecklistUpdateRequest(has_scanner_serial=True)

    def test_table_has_a_column_per_item(self) -> None:
        columns = set(ComplianceChecklist.__table__.columns.keys())
        assert set(ALL_ITEMS) <= columns


class TestCompletionPercentage:
    @pytest.mark.parametrize(
        ("completed", "total", "expected"),
        [(9, 15, 60), (0, 15, 0), (15, 15, 100), (1, 8, 13), (1, 3, 33), (0, 0, 0)],
    )
    def test_rounding(self, completed: int, total: int, expected: int) -> None:
        assert completion_percentage(completed, total) == expected


class TestChecklistState:
    def test_blank_is_all_false(self) -> None:
        state = ChecklistState.blank("rec1")
        assert set(state.items) == set(ALL_ITEMS)
        assert not any(state.items.values())
        assert not state.is_complete
        assert state.completed_at is None
        assert state.missing_mandatory == list(MANDATORY_ITEMS)

    def test_complete_iff_all_mandatory(self) -> None:
        state = ChecklistState.blank("rec1")
        state.apply(_all_mandatory(), "officer", None, T0)
        assert state.is_complete
        assert state.completed_at == T0
        assert state.completed_by == "officer"
        assert state.completion_percentage == 67
        assert state.missing_mandatory == []

    def test_optional_items_alone_do_not_complete(self) -> None:
        state = ChecklistState.blank("rec1")
        optional = {n: True for n in ALL_ITEMS if n not in MANDATORY_ITEMS}
        state.apply(optional, "officer", None, T0)
        assert not state.is_complete
        assert state.completed_at is None
        assert state.completed_by is None

    def test_completion_stamp_kept_while_still_complete(self) -> None:
        state = ChecklistState.blank("rec1")
        state.apply(_all_mandatory(), "a", None, T0)
        state.apply({"has_backup": True}, "b", None, T0 + timedelta(days=1))
        assert state.completed_at == T0
        assert state.completed_by == "a"

    def test_unchecking_mandatory_clears_completion(self) -> None:
        state = ChecklistState.blank("rec1")
        state.apply(_all_mandatory(), "a", None, T0)
        state.apply({"is_legible": False}, "b", None, T0 + timedelta(hours=1))
        assert not state.is_complete
        assert state.completed_at is None
        assert state.completed_by is None
        assert state.missing_mandatory == ["is_legible"]

    def test_recompleting_stamps_new_time(self) -> None:
        state = ChecklistState.blank("rec1")
        state.apply(_all_mandatory(), "a", None, T0)
        state.apply({"is_legible": False}, "a", None, T0)
        later = T0 + timedelta(days=2)
        state.apply({"is_legible": True}, "c", None, later)
        assert state.completed_at == later
        assert state.completed_by == "c"

    def test_unspecified_items_keep_value(self) -> None:
        state = ChecklistState.blank("rec1")
        state.apply({"has_backup": True}, "a", None, T0)
        state.apply({"is_legible": True}, "a", None, T0)
        assert state.items["has_backup"] is True
        assert state.items["is_legible"] is True

    def test_notes_replaced_only_when_given(self) -> None:
        state = ChecklistState.blank("rec1")
        state.apply({}, "a", "first", T0)
        state.apply({}, "a", None, T0)
        assert state.notes == "first"

    def test_unknown_item_rejected_without_changes(self) -> None:
        state = ChecklistState.blank("rec1")
        with pytest.raises(ValidationException) as exc_info:
            state.apply({"has_backup": True, "has_coffee": True}, "a", None, T0)
        assert exc_info.value.details == {"field": "has_coffee"}
        assert state.items["has_backup"] is False

    @pytest.mark.parametrize("value", [1, "true", None])
    def test_non_boolean_rejected(self, value) -> None:
        state = ChecklistState.blank("rec1")
        with pytest.raises(ValidationException, match="must be a boolean"):
            state.apply({"is_legible": value}, "a", None, T0)

    def test_unknown_item_in_constructor_rejected(self) -> None:
        with pytest.raises(ValidationException, match="Unknown checklist items"):
            ChecklistState("rec1", items={"bogus": True})
