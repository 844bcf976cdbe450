"""Custom exception hierarchy for pyprefetch."""

from __future__ import annotations


class PrefetchError(Exception):
    """Base exception for all pyprefetch errors."""


class PrefetchConfigError(PrefetchError):
    """Invalid or missing configuration."""


class PrefetchTransportError(PrefetchError):
    """Network-level failure while fetching a resource."""

    def __init__(
        self,
        message: str,
        *,
        url: str = "",
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class MalformedCandidateError(PrefetchError):
    """A ranked candidate cannot be dispatched (e.g. missing URL).

    Raised before any fetch of the batch is issued, so a malformed
    input never leaves a half-dispatched batch behind.
    """
