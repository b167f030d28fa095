# loading/errors.py
"""
Exceptions raised inside a load attempt.

Only ``TransportError`` subclasses are retried. ``ExhaustedRetriesError``
is turned into the result message; it never reaches the caller of ``load``.
"""

from typing import Optional


class LoadingError(Exception):
    """Base error for data loading."""
    pass


class TransportError(LoadingError):
    """Fetch failed (network, HTTP status, empty body or timeout)."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class HttpStatusError(TransportError):
    """Non-success HTTP status."""

    def __init__(self, status_code: int, reason: str, url: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP {status_code}: {reason}", url)


class EmptyResponseError(TransportError):
    """Response body was empty or whitespace."""

    def __init__(self, url: Optional[str] = None):
        super().__init__("Empty CSV file received", url)


class FetchTimeoutError(TransportError):
    """Attempt exceeded its deadline and was cancelled."""

    def __init__(self, timeout_ms: int, url: Optional[str] = None):
        self.timeout_ms = timeout_ms
        super().__init__(f"Request timed out after {timeout_ms}ms", url)


class ExhaustedRetriesError(LoadingError):
    """Every attempt failed."""

    def __init__(self, source: str, attempts: int, last_error: str):
        self.source = source
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Failed to load {source} after {attempts} attempts: {last_error}")
