from __future__ import annotations


class IdeasSiteError(Exception):
    """Base exception for all ideas-site errors."""


class UpstreamError(IdeasSiteError):
    """Failures talking to the ideas API (transport error, timeout, non-2xx, invalid JSON)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
