"""Custom exceptions for the Issue Query Client."""


class TrackerError(Exception):
    """Base exception for issue tracker errors."""


class NetworkError(TrackerError):
    """The request never produced an HTTP response (connect, read, timeout)."""


class AuthError(TrackerError):
    """Tracker rejected the credential (HTTP 401/403)."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class SearchFailedError(TrackerError):
    """Tracker answered the search with another non-success status (e.g. invalid JQL)."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(TrackerError):
    """Response body is not the expected JSON search shape."""
