"""WorkAggregator - Builds the "My Work" kanban model from two dependent searches."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from myworkboard.aggregator import jql
from myworkboard.aggregator.exceptions import MissingCredentialError
from myworkboard.aggregator.models import InitiativeRecord, KanbanModel, SubtaskRecord
from myworkboard.config import DEFAULT_MAX_RESULTS, DEFAULT_TARGET_END_FIELD
from myworkboard.logging import get_logger
from myworkboard.tracker import MalformedResponseError

if TYPE_CHECKING:
    from myworkboard.tracker import IssueQueryClient, SearchResult
    from myworkboard.vault import CredentialVault

logger = get_logger("aggregator")

UNKNOWN_STATUS = "Unknown"

SUBTASK_FIELDS = ("key", "summary", "assignee", "status", "parent", "duedate")
INITIATIVE_BASE_FIELDS = ("key", "summary", "status", "issuetype", "fixVersions")


def _name(value: Any) -> str | None:
    """Extract ``name`` from a tracker object field such as status or version."""
    if isinstance(value, Mapping):
        name = value.get("name")
        if isinstance(name, str):
            return name
    return None


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _parent_key(issue: dict[str, Any]) -> str | None:
    """Parent key of a sub-task, or None for an orphan.

    Raises:
        MalformedResponseError: If a parent is present but has no key.
    """
    parent = issue["fields"].get("parent")
    if not parent:
        return None
    if not isinstance(parent, Mapping) or not isinstance(parent.get("key"), str):
        raise MalformedResponseError(f"Sub-task {issue['key']} has a parent without a key")
    return str(parent["key"])


class WorkAggregator:
    """Turns a user's assigned sub-tasks into initiatives grouped by status.

    Phase 1 searches the user's sub-tasks; phase 2 searches their parents of the
    configured issue type. Both searches ask the tracker for rank order and the
    aggregator never re-sorts, so a fixed tracker snapshot always yields the same
    model.
    """

    def __init__(
        self,
        vault: CredentialVault,
        client: IssueQueryClient,
        target_end_field: str = DEFAULT_TARGET_END_FIELD,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> None:
        """Initialize the aggregator.

        Args:
            vault: Source of the bearer credential.
            client: Tracker search client.
            target_end_field: Custom field holding an initiative's target end date.
            max_results: Result cap for each search.
        """
        self.vault = vault
        self.client = client
        self.target_end_field = target_end_field
        self.max_results = max_results

    @property
    def initiative_fields(self) -> tuple[str, ...]:
        return (*INITIATIVE_BASE_FIELDS, self.target_end_field)

    async def fetch_my_work(
        self,
        base_url: str,
        project_key: str,
        parent_issue_type: str,
        username: str,
    ) -> KanbanModel:
        """Build a fresh KanbanModel for a user.

        Args:
            base_url: Tracker base URL.
            project_key: Project to search in.
            parent_issue_type: Issue type name of initiatives (e.g. "Solution Initiative").
            username: Assignee of the sub-tasks.

        Returns:
            The kanban model. Empty, without a second search, when no sub-task
            has a parent.

        Raises:
            MissingCredentialError: If the vault has no usable credential.
            NetworkError, AuthError, SearchFailedError, MalformedResponseError:
                Propagated from either search; no partial model is returned.
        """
        # Captured once: a concurrent clear() does not affect this call.
        # Blocking read: SQLite plus the OS keyring.
        credential = await asyncio.to_thread(self.vault.retrieve)
        if credential is None:
            raise MissingCredentialError("No credential stored")

        logger.info("Fetching work for %s in project %s", username, project_key)

        subtask_result = await self.client.search(
            base_url,
            credential,
            jql.subtasks_query(project_key, username),
            SUBTASK_FIELDS,
            self.max_results,
        )
        self._warn_if_truncated("sub-task", subtask_result)
        subtasks_by_parent = self._group_subtasks(subtask_result)

        if not subtasks_by_parent:
            logger.info("No parented sub-tasks for %s; skipping initiative search", username)
            return KanbanModel.empty()

        initiative_result = await self.client.search(
            base_url,
            credential,
            jql.initiatives_query(project_key, list(subtasks_by_parent), parent_issue_type),
            self.initiative_fields,
            self.max_results,
        )
        self._warn_if_truncated("initiative", initiative_result)

        model = self._assemble(initiative_result, subtasks_by_parent)
        logger.info(
            "Built board for %s: %d initiative(s) in %d column(s)",
            username,
            len(model.ordered_initiative_keys),
            len(model.columns),
        )
        return model

    def _group_subtasks(self, result: SearchResult) -> dict[str, list[SubtaskRecord]]:
        """Group sub-tasks by parent key, keeping rank order. Orphans are dropped.

        The dict's insertion order doubles as the de-duplicated parent key set.
        """
        grouped: dict[str, list[SubtaskRecord]] = {}
        for issue in result.issues:
            parent_key = _parent_key(issue)
            if parent_key is None:
                logger.debug("Dropping orphan sub-task %s", issue["key"])
                continue
            fields = issue["fields"]
            grouped.setdefault(parent_key, []).append(
                SubtaskRecord(
                    key=issue["key"],
                    summary=fields.get("summary") or "",
                    status=_name(fields.get("status")) or "",
                    parent_key=parent_key,
                    due_date=_optional_str(fields.get("duedate")),
                )
            )
        return grouped

    def _to_initiative(self, issue: dict[str, Any]) -> InitiativeRecord:
        fields = issue["fields"]
        versions: list[str] = []
        for version in fields.get("fixVersions") or []:
            name = _name(version)
            if name is not None and name not in versions:
                versions.append(name)
        return InitiativeRecord(
            key=issue["key"],
            summary=fields.get("summary") or "",
            status=_name(fields.get("status")) or UNKNOWN_STATUS,
            fix_versions=versions,
            target_end_date=_optional_str(fields.get(self.target_end_field)),
        )

    def _assemble(
        self,
        result: SearchResult,
        subtasks_by_parent: dict[str, list[SubtaskRecord]],
    ) -> KanbanModel:
        model = KanbanModel()
        for issue in result.issues:
            initiative = self._to_initiative(issue)
            model.columns.setdefault(initiative.status, []).append(initiative)
            model.ordered_initiative_keys.append(initiative.key)
            if initiative.key in subtasks_by_parent:
                model.subtasks_by_parent[initiative.key] = subtasks_by_parent[initiative.key]

        dropped = [key for key in subtasks_by_parent if key not in model.subtasks_by_parent]
        if dropped:
            logger.debug("Parents filtered out by issue type: %s", ", ".join(dropped))
        return model

    def _warn_if_truncated(self, phase: str, result: SearchResult) -> None:
        if result.is_truncated:
            logger.warning(
                "%s search hit the %d result cap; the board may be incomplete",
                phase.capitalize(),
                self.max_results,
            )
