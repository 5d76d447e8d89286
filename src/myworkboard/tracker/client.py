"""IssueQueryClient - Runs JQL searches against the tracker REST API."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from myworkboard.logging import get_logger, sanitize_for_log, truncate_output
from myworkboard.tracker.exceptions import (
    AuthError,
    MalformedResponseError,
    NetworkError,
    SearchFailedError,
)
from myworkboard.tracker.models import SearchResult

logger = get_logger("tracker")

SEARCH_PATH = "/rest/api/2/search"
DEFAULT_TIMEOUT = 30.0


def search_url(base_url: str) -> str:
    """Build the search endpoint URL for a tracker base URL."""
    return base_url.rstrip("/") + SEARCH_PATH


class IssueQueryClient:
    """Async client for the tracker's search endpoint.

    The credential is passed per call, so one client can serve any number of
    concurrent searches without holding a secret.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the query client.

        Args:
            timeout: Transport timeout in seconds for owned HTTP clients.
            client: Pre-built HTTP client (for testing/custom transports).
                    An injected client is never closed by this object.
        """
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> IssueQueryClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def search(
        self,
        base_url: str,
        credential: str,
        jql: str,
        fields: Sequence[str],
        max_results: int,
    ) -> SearchResult:
        """Execute a JQL search.

        Args:
            base_url: Tracker base URL (trailing slash optional).
            credential: Bearer credential.
            jql: JQL expression, including any ORDER BY clause.
            fields: Field names to return for each issue.
            max_results: Result cap. A result of exactly this size may be truncated.

        Returns:
            SearchResult with issues in tracker order.

        Raises:
            NetworkError: If the request fails at the transport level.
            AuthError: If the tracker answers 401 or 403.
            SearchFailedError: If the tracker answers with another non-2xx status.
            MalformedResponseError: If the body is not the expected JSON shape.
        """
        url = search_url(base_url)
        params = {
            "jql": jql,
            "fields": ",".join(fields),
            "maxResults": max_results,
        }
        logger.debug("Searching %s: %s", url, jql)

        try:
            response = await self.client.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {credential}"},
            )
        except httpx.TransportError as e:
            logger.error("Search request to %s failed: %s", url, type(e).__name__)
            raise NetworkError(f"Request to {url} failed: {e}") from e

        if response.status_code in (401, 403):
            logger.warning("Tracker rejected credential: HTTP %d", response.status_code)
            raise AuthError(
                f"Tracker rejected the credential: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        if not response.is_success:
            body = sanitize_for_log(truncate_output(response.text))
            logger.error("Search failed: %d - %s", response.status_code, body)
            raise SearchFailedError(
                f"Search failed: {response.status_code} - {body}",
                status_code=response.status_code,
            )

        result = self._parse(response, max_results)
        logger.debug("Search returned %d issue(s)", len(result.issues))
        return result

    def _parse(self, response: httpx.Response, max_results: int) -> SearchResult:
        """Validate the search response body.

        Raises:
            MalformedResponseError: If any part of the shape is wrong.
        """
        try:
            data: Any = response.json()
        except ValueError as e:
            raise MalformedResponseError("Search response is not valid JSON") from e

        if not isinstance(data, Mapping):
            raise MalformedResponseError("Search response is not a JSON object")

        issues = data.get("issues")
        if not isinstance(issues, list):
            raise MalformedResponseError("Search response has no 'issues' array")

        for index, issue in enumerate(issues):
            if not isinstance(issue, Mapping):
                raise MalformedResponseError(f"Issue #{index} is not an object")
            if not isinstance(issue.get("key"), str):
                raise MalformedResponseError(f"Issue #{index} has no string 'key'")
            if not isinstance(issue.get("fields"), Mapping):
                raise MalformedResponseError(f"Issue {issue['key']} has no 'fields' object")

        total = data.get("total")
        return SearchResult(
            issues=[dict(issue) for issue in issues],
            total=total if isinstance(total, int) else None,
            max_results=max_results,
        )
