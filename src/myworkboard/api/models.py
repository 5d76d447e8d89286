"""Pydantic models for REST API."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from myworkboard.aggregator import InitiativeRecord, KanbanModel, SubtaskRecord

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Credential models


class CredentialSave(BaseModel):
    """Request model for saving the tracker credential."""

    credential: str = Field(..., min_length=1)

    @field_validator("credential")
    @classmethod
    def strip_credential(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("credential must not be blank")
        return value


class CredentialResponse(BaseModel):
    """Response model for the stored credential."""

    stored: bool
    credential: str | None = None


# My Work models


class FetchMyWorkRequest(BaseModel):
    """Request model for building the "My Work" board."""

    base_url: str = Field(..., min_length=1, pattern=r"^https?://")
    project_key: str = Field(..., min_length=1, max_length=255)
    issue_type_name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=255)


class BoardModel(BaseModel):
    """Base for board responses: snake_case in Python, camelCase on the wire.

    Serialized by alias, a board matches ``KanbanModel.to_dict()`` key for key.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SubtaskResponse(BoardModel):
    """Response model for a sub-task."""

    key: str
    summary: str
    status: str
    due_date: str | None
    parent_key: str


class InitiativeResponse(BoardModel):
    """Response model for an initiative."""

    key: str
    summary: str
    status: str
    fix_versions: list[str]
    target_end_date: str | None


class KanbanResponse(BoardModel):
    """Response model for the "My Work" board."""

    columns: dict[str, list[InitiativeResponse]]
    ordered_initiative_keys: list[str]
    subtasks_by_parent: dict[str, list[SubtaskResponse]]


def _initiative_to_response(initiative: InitiativeRecord) -> InitiativeResponse:
    return InitiativeResponse.model_validate(initiative)


def _subtask_to_response(subtask: SubtaskRecord) -> SubtaskResponse:
    return SubtaskResponse.model_validate(subtask)


def kanban_to_response(model: KanbanModel) -> KanbanResponse:
    """Convert a KanbanModel to KanbanResponse, preserving every ordering."""
    return KanbanResponse(
        columns={
            status: [_initiative_to_response(i) for i in initiatives]
            for status, initiatives in model.columns.items()
        },
        ordered_initiative_keys=list(model.ordered_initiative_keys),
        subtasks_by_parent={
            key: [_subtask_to_response(s) for s in subtasks]
            for key, subtasks in model.subtasks_by_parent.items()
        },
    )
