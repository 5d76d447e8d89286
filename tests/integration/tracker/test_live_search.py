"""Integration tests against a live tracker.

These tests require:
- JIRA_URL environment variable (e.g., "https://jira.example.com")
- JIRA_PAT environment variable (personal access token)
- JIRA_TEST_PROJECT environment variable (project key)
- JIRA_TEST_USER environment variable (assignee username)
- JIRA_TEST_ISSUE_TYPE environment variable (initiative type, optional)

Run with: pytest tests/integration/tracker/ -m real
"""

import os

import pytest

from myworkboard.aggregator import WorkAggregator
from myworkboard.tracker import AuthError, IssueQueryClient

pytestmark = [
    pytest.mark.integration,
    pytest.mark.real,
    pytest.mark.skipif(
        not os.environ.get("JIRA_URL")
        or not os.environ.get("JIRA_PAT")
        or not os.environ.get("JIRA_TEST_PROJECT")
        or not os.environ.get("JIRA_TEST_USER"),
        reason="JIRA_URL, JIRA_PAT, JIRA_TEST_PROJECT and JIRA_TEST_USER required",
    ),
]


class _EnvVault:
    """Vault stand-in that reads the credential from the environment."""

    def retrieve(self) -> str | None:
        return os.environ.get("JIRA_PAT")


@pytest.mark.asyncio
async def test_search_returns_issues_shape() -> None:
    """A simple project search returns keyed issues with fields."""
    async with IssueQueryClient() as client:
        result = await client.search(
            os.environ["JIRA_URL"],
            os.environ["JIRA_PAT"],
            f'project = "{os.environ["JIRA_TEST_PROJECT"]}" ORDER BY Rank ASC',
            ["key", "summary", "status"],
            5,
        )

    assert len(result.issues) <= 5
    for issue in result.issues:
        assert issue["key"]
        assert "summary" in issue["fields"]


@pytest.mark.asyncio
async def test_bad_credential_raises_auth_error() -> None:
    """An invalid credential is rejected distinctly."""
    async with IssueQueryClient() as client:
        with pytest.raises(AuthError):
            await client.search(
                os.environ["JIRA_URL"], "not-a-valid-token", "order by created", ["key"], 1
            )


@pytest.mark.asyncio
async def test_fetch_my_work_is_repeatable() -> None:
    """Two fetches against the live tracker agree."""
    issue_type = os.environ.get("JIRA_TEST_ISSUE_TYPE", "Solution Initiative")
    async with IssueQueryClient() as client:
        aggregator = WorkAggregator(vault=_EnvVault(), client=client)  # type: ignore[arg-type]
        args = (
            os.environ["JIRA_URL"],
            os.environ["JIRA_TEST_PROJECT"],
            issue_type,
            os.environ["JIRA_TEST_USER"],
        )
        first = await aggregator.fetch_my_work(*args)
        second = await aggregator.fetch_my_work(*args)

    assert first.to_dict() == second.to_dict()
