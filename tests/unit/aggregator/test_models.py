"""Unit tests for Work Aggregator models."""

import json

import pytest

from myworkboard.aggregator import InitiativeRecord, KanbanModel, SubtaskRecord


@pytest.fixture
def model() -> KanbanModel:
    """Create a two-column model."""
    a = InitiativeRecord(key="A", summary="Alpha", status="Funnel", fix_versions=["26.1"])
    b = InitiativeRecord(key="B", summary="Beta", status="Analyzing", target_end_date="2026-12-31")
    return KanbanModel(
        columns={"Funnel": [a], "Analyzing": [b]},
        ordered_initiative_keys=["A", "B"],
        subtasks_by_parent={
            "A": [SubtaskRecord(key="S1", summary="Do it", status="Done", parent_key="A")],
        },
    )


@pytest.mark.unit
class TestKanbanModel:
    """Tests for KanbanModel."""

    def test_empty(self) -> None:
        """The empty model has no columns, keys or sub-tasks."""
        empty = KanbanModel.empty()

        assert empty.is_empty()
        assert empty.to_dict() == {
            "columns": {},
            "orderedInitiativeKeys": [],
            "subtasksByParent": {},
        }

    def test_to_dict_wire_form(self, model: KanbanModel) -> None:
        """to_dict uses the wire field names and is JSON-serializable."""
        data = model.to_dict()

        assert json.loads(json.dumps(data)) == data
        assert data["columns"]["Funnel"] == [
            {
                "key": "A",
                "summary": "Alpha",
                "status": "Funnel",
                "fixVersions": ["26.1"],
                "targetEndDate": None,
            }
        ]
        assert data["orderedInitiativeKeys"] == ["A", "B"]
        assert data["subtasksByParent"]["A"][0] == {
            "key": "S1",
            "summary": "Do it",
            "status": "Done",
            "dueDate": None,
            "parentKey": "A",
        }

    def test_statuses_in_column_order(self, model: KanbanModel) -> None:
        """statuses lists columns in first-seen order."""
        assert model.statuses == ["Funnel", "Analyzing"]
        assert not model.is_empty()
