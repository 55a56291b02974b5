"""Exception hierarchy for static data loading and realtime polling."""

from dataclasses import dataclass


class WLTransitError(Exception):
    """Base exception for all wl_transit failures."""


class ParseError(WLTransitError):
    """Raised when the static snapshot contains malformed values.

    Fatal to the load step: the whole snapshot is rejected.
    """


class FeedError(WLTransitError):
    """Base exception for a failed realtime fetch cycle."""


class TransportError(FeedError):
    """Raised on network errors or non-2xx responses from the monitor API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(FeedError):
    """Raised when the monitor API response body is not valid JSON."""


@dataclass(frozen=True)
class SchemaIssue:
    """A single field-level problem found while validating a feed payload."""

    path: str
    message: str
    kind: str

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.message} ({self.kind})"


class SchemaValidationError(FeedError):
    """Raised when a decoded payload does not match the monitor feed contract."""

    def __init__(self, issues: list[SchemaIssue]):
        self.issues = issues
        summary = "; ".join(str(issue) for issue in issues[:5])
        if len(issues) > 5:
            summary += f"; ... ({len(issues) - 5} more)"
        super().__init__(f"Invalid monitor response: {summary}")
