from __future__ import annotations

from typing import List, Optional


class PivotalTrackerError(Exception):
    """Base error for client failures."""


class ConfigurationError(PivotalTrackerError, ValueError):
    """Raised when the client cannot be configured (bad URL, missing env)."""


class TransportError(PivotalTrackerError):
    def __init__(self, *, method: str, url: str, cause: BaseException):
        super().__init__(f"Network/timeout error calling {method} {url}: {cause}")
        self.method = method
        self.url = url
        self.cause = cause


class ResponseParseError(PivotalTrackerError):
    def __init__(self, message: str, *, snippet: Optional[str] = None):
        super().__init__(message)
        self.snippet = snippet


class MissingElementError(ResponseParseError):
    def __init__(self, *, tag: str, parent: str):
        super().__init__(f"Expected <{tag}> inside <{parent}>, found none")
        self.tag = tag
        self.parent = parent


class AuthenticationError(PivotalTrackerError):
    pass


class TrackerApiError(PivotalTrackerError, ValueError):
    """The API answered with an <errors> document instead of a resource."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages) or "API returned an empty error list")
        self.messages = messages


__all__ = [
    "PivotalTrackerError",
    "ConfigurationError",
    "TransportError",
    "ResponseParseError",
    "MissingElementError",
    "AuthenticationError",
    "TrackerApiError",
]
