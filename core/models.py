"""Core domain models for captured images and per-day groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


@dataclass(frozen=True)
class CapturedImage:
    """A single photo whose capture instant was recovered from its file name."""

    source_path: str
    file_name: str
    captured_at: datetime

    @property
    def capture_date(self) -> date:
        """Calendar date the photo was taken."""
        return self.captured_at.date()

    @property
    def hour(self) -> int:
        """Hour-of-day the photo was taken."""
        return self.captured_at.hour


@dataclass
class DayGroup:
    """Images captured on one calendar date, ascending by capture instant."""

    date: date
    images: list[CapturedImage] = field(default_factory=list)


@dataclass
class SelectionResult:
    """Representative image chosen for a day, or None when nothing qualified."""

    date: date
    chosen: CapturedImage | None


@dataclass
class EncodeResult:
    """Outcome of one external encoder invocation."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class ProcessingState(Enum):
    UNPROCESSED = "unprocessed"
    COPIED = "copied"
    ENCODED = "encoded"
    FINISHED = "finished"


@dataclass
class DayOutcome:
    """What the orchestrator did for a single per-day source directory.

    Attributes:
        day: Directory name, `YYYY-MM-DD`.
        state: Last state reached.
        frames_written: Number of frames materialized (0 when skipped).
        encode_result: Encoder result, or None when encoding was not run.
        skipped: True when the ledger already listed the directory.
    """

    day: str
    state: ProcessingState = ProcessingState.UNPROCESSED
    frames_written: int = 0
    encode_result: EncodeResult | None = None
    skipped: bool = False
