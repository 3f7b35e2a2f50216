"""Data models for translation attempts and run statistics."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..errors import XCSyncError


@dataclass(frozen=True)
class Translation:
    """A provider reply that passed validation."""

    source: str
    translation: str
    explanation: Optional[str] = None


@dataclass(frozen=True)
class Accepted:
    """Attempt outcome carrying an accepted translation."""

    translation: Translation


@dataclass(frozen=True)
class Failed:
    """Attempt outcome carrying the transport or validation error."""

    error: XCSyncError


AttemptResult = Union[Accepted, Failed]


class PairOutcome(str, Enum):
    """Terminal state of a (term, language) pair."""

    SKIPPED = "skipped"
    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"


@dataclass
class SyncStats:
    """Statistics for a synchronization run."""

    skipped: int = 0
    accepted: int = 0
    exhausted: int = 0
    attempts: int = 0

    @property
    def total(self) -> int:
        return self.skipped + self.accepted + self.exhausted

    def record(self, outcome: PairOutcome) -> None:
        if outcome is PairOutcome.SKIPPED:
            self.skipped += 1
        elif outcome is PairOutcome.ACCEPTED:
            self.accepted += 1
        else:
            self.exhausted += 1

    def merge(self, other: "SyncStats") -> None:
        self.skipped += other.skipped
        self.accepted += other.accepted
        self.exhausted += other.exhausted
        self.attempts += other.attempts
