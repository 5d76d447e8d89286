"""Data models for the Work Aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SubtaskRecord:
    """A sub-task assigned to the user."""

    key: str
    summary: str
    status: str
    parent_key: str
    due_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "summary": self.summary,
            "status": self.status,
            "dueDate": self.due_date,
            "parentKey": self.parent_key,
        }


@dataclass
class InitiativeRecord:
    """A parent issue of the configured initiative type."""

    key: str
    summary: str
    status: str
    fix_versions: list[str] = field(default_factory=list)
    target_end_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "summary": self.summary,
            "status": self.status,
            "fixVersions": list(self.fix_versions),
            "targetEndDate": self.target_end_date,
        }


@dataclass
class KanbanModel:
    """Initiatives grouped by status, with the user's sub-tasks under each.

    Attributes:
        columns: Status name -> initiatives in rank order.
        ordered_initiative_keys: Every initiative key across all columns, in
            global rank order.
        subtasks_by_parent: Initiative key -> its sub-tasks in rank order. Only
            initiatives present in ``columns`` appear here.
    """

    columns: dict[str, list[InitiativeRecord]] = field(default_factory=dict)
    ordered_initiative_keys: list[str] = field(default_factory=list)
    subtasks_by_parent: dict[str, list[SubtaskRecord]] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> KanbanModel:
        return cls()

    @property
    def statuses(self) -> list[str]:
        """Column names in the order their first initiative was ranked."""
        return list(self.columns)

    def is_empty(self) -> bool:
        return not self.ordered_initiative_keys

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable wire form."""
        return {
            "columns": {
                status: [initiative.to_dict() for initiative in initiatives]
                for status, initiatives in self.columns.items()
            },
            "orderedInitiativeKeys": list(self.ordered_initiative_keys),
            "subtasksByParent": {
                parent_key: [subtask.to_dict() for subtask in subtasks]
                for parent_key, subtasks in self.subtasks_by_parent.items()
            },
        }
