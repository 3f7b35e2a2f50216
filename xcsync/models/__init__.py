"""Data models for the synchronization pipeline."""

from .string_entry import StringUnit, Localization, StringEntry, XCStringsFile
from .translation_result import (
    Accepted,
    AttemptResult,
    Failed,
    PairOutcome,
    SyncStats,
    Translation,
)

__all__ = [
    "StringUnit",
    "Localization",
    "StringEntry",
    "XCStringsFile",
    "Translation",
    "Accepted",
    "Failed",
    "AttemptResult",
    "PairOutcome",
    "SyncStats",
]
