"""Exception types raised by the synchronization pipeline."""

from typing import Optional


class XCSyncError(Exception):
    """Base class for all xcsync errors."""


class FormatError(XCSyncError):
    """The catalog document is malformed or cannot be encoded."""


class ConfigError(XCSyncError):
    """The run configuration is invalid."""


class TransportError(XCSyncError):
    """The translation provider could not be reached or answered badly."""


class ValidationError(XCSyncError):
    """A provider reply arrived but is not an acceptable translation."""

    def __init__(self, reason: str, token: Optional[str] = None, detail: str = ""):
        self.reason = reason
        self.token = token
        self.detail = detail
        message = reason if token is None else f"{reason}: {token}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class TermNotFoundError(XCSyncError, KeyError):
    """Raised when a term key is not present in the catalog."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Term not found: {self.key!r}"
