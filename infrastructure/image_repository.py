"""Discovery of timestamp-named image files on disk.

Turns directory listings into `CapturedImage` records. Files whose names do
not parse are logged and skipped; a bad name never aborts a batch.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime
import os
from pathlib import Path

from loguru import logger

from core.models import CapturedImage
from core.services.timestamp_parser import parse_capture_time

IMAGE_SUFFIXES = (".jpg", ".jpeg")


class ImageFileRepository:
    """Yield `CapturedImage` records for image files under a directory."""

    def __init__(self, parser: Callable[[str], datetime | None] = parse_capture_time) -> None:
        self._parser = parser

    def to_captured_image(self, path: str) -> CapturedImage | None:
        """Build a `CapturedImage` for `path`, or None when its name does not parse."""
        p = Path(path)
        captured_at = self._parser(p.stem)
        if captured_at is None:
            logger.warning("Skipping file with unrecognized timestamp name: {}", path)
            return None
        return CapturedImage(source_path=str(p), file_name=p.name, captured_at=captured_at)

    def list_image_paths(self, directory: str, recursive: bool = False) -> list[str]:
        """Return image paths under `directory` in a stable (sorted) order."""
        paths: list[str] = []
        if recursive:
            for root, dirs, files in os.walk(directory):
                dirs.sort()
                for name in sorted(files):
                    if name.lower().endswith(IMAGE_SUFFIXES):
                        paths.append(os.path.join(root, name))
            return paths

        with os.scandir(directory) as it:
            for entry in it:
                if entry.is_file() and entry.name.lower().endswith(IMAGE_SUFFIXES):
                    paths.append(entry.path)
        return sorted(paths)

    def load_directory(self, directory: str, recursive: bool = False) -> Iterator[CapturedImage]:
        """Yield valid images found in `directory`."""
        for path in self.list_image_paths(directory, recursive=recursive):
            image = self.to_captured_image(path)
            if image is not None:
                yield image
