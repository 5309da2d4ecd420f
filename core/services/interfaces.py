"""Core service interfaces and shared error types.

The pipeline services in `core.services` depend only on these small
interfaces; `infrastructure` provides the Pillow, subprocess and file-backed
implementations.
"""

from __future__ import annotations

from collections.abc import Sequence

from core.models import EncodeResult


class MissingSourceDirectoryError(FileNotFoundError):
    """A configured source directory does not exist.

    Treated as misconfiguration: the whole run aborts.
    """


class ILedger:
    """Interface for the record of source directories already processed."""

    def is_finished(self, path: str) -> bool:
        """Return True if `path` was recorded as finished."""
        raise NotImplementedError

    def mark_finished(self, path: str) -> None:
        """Record `path` as finished."""
        raise NotImplementedError


class IImageResizer:
    """Interface for the decode/resize/encode collaborator."""

    def save_scaled(self, source_path: str, dest_path: str, divisor: int = 2) -> tuple[int, int]:
        """Save a copy of `source_path` with both sides divided by `divisor`.

        Returns the (width, height) written.
        """
        raise NotImplementedError

    def save_thumbnail(self, source_path: str, dest_path: str, height: int) -> tuple[int, int]:
        """Save a proportionally scaled copy of fixed `height`.

        Returns the (width, height) written.
        """
        raise NotImplementedError


class IEncoderRunner:
    """Interface for running the external video encoder."""

    def run(self, args: Sequence[str]) -> EncodeResult:
        """Run the encoder with `args` and capture its output."""
        raise NotImplementedError
