"""Error taxonomy for API access.

Every failure surfaced by the API layer is an `ApiError` carrying a stable
`kind` discriminator, so the presentation layer can pick a message without
matching on exception text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminator for `ApiError` subclasses."""

    TIMEOUT = "timeout"
    HTTP = "http"
    NETWORK = "network"
    DECODE = "decode"


class ApiError(Exception):
    """Base class for classified API failures."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ApiTimeout(ApiError):
    """The request exceeded its deadline and was aborted."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, url: str, timeout_seconds: float) -> None:
        super().__init__(f"Request to {url} timed out after {timeout_seconds:g}s")
        self.url = url
        self.timeout_seconds = timeout_seconds


class HttpError(ApiError):
    """The transport succeeded but the status code signals failure."""

    kind = ErrorKind.HTTP

    def __init__(self, status: int, url: str = "") -> None:
        super().__init__(f"HTTP error! status: {status}")
        self.status = status
        self.url = url


class NetworkError(ApiError):
    """Transport-level failure before any status was obtained."""

    kind = ErrorKind.NETWORK


class DecodeError(ApiError):
    """The response body is not valid JSON or not the expected shape."""

    kind = ErrorKind.DECODE


def describe_failure(action: str, error: ApiError) -> str:
    """User-facing text for a failed `action` ("load medications", ...)."""

    if error.kind is ErrorKind.TIMEOUT:
        return (
            f"Could not {action}: the server did not answer in time. "
            "It may be starting up, please try again in a moment."
        )
    if isinstance(error, HttpError):
        return f"Failed to {action} (HTTP {error.status})."
    if error.kind is ErrorKind.NETWORK:
        return f"Failed to {action}: the server is unreachable."
    if error.kind is ErrorKind.DECODE:
        return f"Failed to {action}: the server sent an unexpected response."
    return f"Failed to {action}."
