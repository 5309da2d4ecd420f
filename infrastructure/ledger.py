"""Append-only ledger of source directories that were fully processed.

One absolute path per line, UTF-8, no header. Reads are a linear scan; writes
only ever append. Re-appending an existing path is harmless.
"""

from __future__ import annotations

from pathlib import Path
import threading

from loguru import logger

from core.services.interfaces import ILedger

DEFAULT_LEDGER_NAME = "finishedPaths.log"


class FinishedPathsLedger(ILedger):
    """File-backed `ILedger`."""

    def __init__(self, ledger_path: str | Path = DEFAULT_LEDGER_NAME) -> None:
        self._path = Path(ledger_path)
        self._lock = threading.Lock()

    def entries(self) -> list[str]:
        """Return all recorded paths; empty when the ledger is missing or unreadable."""
        if not self._path.exists():
            return []
        try:
            with self._path.open("r", encoding="utf-8") as f:
                return [line.rstrip("\r\n") for line in f if line.strip()]
        except (OSError, UnicodeDecodeError) as ex:
            logger.warning("Ledger read failed for {} ({}), treating as empty", self._path, ex)
            return []

    def is_finished(self, path: str) -> bool:
        """Exact-match lookup of `path` among the recorded entries."""
        return path in self.entries()

    def mark_finished(self, path: str) -> None:
        """Append `path`; I/O errors propagate to the caller."""
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8", newline="\n") as f:
                f.write(f"{path}\n")
        logger.info("Ledger: marked finished {}", path)
