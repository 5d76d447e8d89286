"""Issue Query Client - Bearer-authenticated JQL search against the tracker."""

from myworkboard.tracker.client import IssueQueryClient, search_url
from myworkboard.tracker.exceptions import (
    AuthError,
    MalformedResponseError,
    NetworkError,
    SearchFailedError,
    TrackerError,
)
from myworkboard.tracker.models import SearchResult

__all__ = [
    "AuthError",
    "IssueQueryClient",
    "MalformedResponseError",
    "NetworkError",
    "SearchFailedError",
    "SearchResult",
    "TrackerError",
    "search_url",
]
