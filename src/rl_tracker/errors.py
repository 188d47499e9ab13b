"""Exceptions raised by the tracker client.

Every failure surfaces directly to the caller; nothing here is caught and
retried internally.
"""

from __future__ import annotations

from typing import Any


class TrackerError(RuntimeError):
    """Base class for all tracker client failures."""

    pass


class FetchError(TrackerError):
    """Raised when the provider could not be reached (transport failure)."""

    pass


class ParseError(TrackerError):
    """Raised when a response body is not the structured document we expect."""

    pass


class ProviderError(TrackerError):
    """Raised when the provider answers with a non-empty ``errors`` list.

    The message is the first reported error's message. The full list is kept
    on ``errors`` for diagnostics only.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class NotLoadedError(TrackerError):
    """Raised when a projection is requested before a document was loaded."""

    def __init__(self, message: str = "No data found") -> None:
        super().__init__(message)


class SegmentNotFoundError(TrackerError):
    """Raised when no segment matches the requested type or playlist name."""

    def __init__(self, lookup_key: str) -> None:
        super().__init__(f"No {lookup_key} data found")
        self.lookup_key = lookup_key
