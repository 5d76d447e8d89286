"""Data models for the Issue Query Client."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SearchResult:
    """Issues returned by one search, in the order the tracker returned them.

    Each issue is the raw tracker record: ``{"key": ..., "fields": {...}}``.
    """

    issues: list[dict[str, Any]] = field(default_factory=list)
    total: int | None = None  # tracker-reported match count, when present
    max_results: int = 0

    @property
    def is_truncated(self) -> bool:
        """True when the result hit the cap and may be missing issues."""
        return self.max_results > 0 and len(self.issues) >= self.max_results
