"""JQL builders for the two "My Work" searches."""

from __future__ import annotations

from collections.abc import Iterable

SUBTASK_ISSUE_TYPE = "Sub-task"
RANK_ORDER = "ORDER BY Rank ASC"


def quote(value: str) -> str:
    """Quote a JQL string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def subtasks_query(project_key: str, username: str) -> str:
    """Sub-tasks in a project assigned to a user, in rank order."""
    return (
        f"project = {quote(project_key)} AND issuetype = {quote(SUBTASK_ISSUE_TYPE)} "
        f"AND assignee = {quote(username)} {RANK_ORDER}"
    )


def initiatives_query(project_key: str, parent_keys: Iterable[str], issue_type: str) -> str:
    """Parents with the given keys and issue type, in rank order."""
    key_list = ",".join(quote(key) for key in parent_keys)
    return (
        f"project = {quote(project_key)} AND key in ({key_list}) "
        f"AND issuetype = {quote(issue_type)} {RANK_ORDER}"
    )
