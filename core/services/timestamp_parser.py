"""Capture-time parsing from photo file names.

Two strict conventions are recognized:

- `YYYY-MM-DD HHMMSS` (e.g. `2019-06-01 140312`), written by the camera
  uploader into per-day directories;
- Unix epoch milliseconds (e.g. `1559397792000`), found in the unsorted dumps.

Parsing never raises; callers get `None` for anything that does not match and
are expected to filter those out of a batch.
"""

from __future__ import annotations

from datetime import datetime, timedelta
import re

STAMP_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2}) (\d{2})(\d{2})(\d{2})", re.ASCII)
EPOCH_MS_RE = re.compile(r"\d{13}", re.ASCII)

SNAPSHOT_NAME_FMT = "%Y-%m-%dT%H%M%S"


def parse_capture_time(stem: str) -> datetime | None:
    """Parse a `YYYY-MM-DD HHMMSS` file stem; None on any deviation."""
    if not isinstance(stem, str):
        return None
    m = STAMP_RE.fullmatch(stem)
    if m is None:
        return None
    try:
        return datetime(*(int(part) for part in m.groups()))
    except ValueError:
        return None


def parse_epoch_capture_time(stem: str) -> datetime | None:
    """Parse a 13-digit epoch-milliseconds file stem as naive local time."""
    if not isinstance(stem, str) or EPOCH_MS_RE.fullmatch(stem) is None:
        return None
    millis = int(stem)
    try:
        return datetime.fromtimestamp(millis // 1000) + timedelta(milliseconds=millis % 1000)
    except (OverflowError, OSError, ValueError):
        return None


def parse_any_capture_time(stem: str) -> datetime | None:
    """Try both conventions; None when the stem matches neither."""
    return parse_capture_time(stem) or parse_epoch_capture_time(stem)


def format_snapshot_name(captured_at: datetime) -> str:
    """Format the base name used for representative snapshot files."""
    return captured_at.strftime(SNAPSHOT_NAME_FMT)
