"""Materialization of resized, sequentially named frame directories.

Frames are written as `image_0000.jpg`, `image_0001.jpg`, ... in chronological
order. The ffmpeg input pattern in `infrastructure.encoder` depends on this
exact prefix and width.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
import time

from loguru import logger

from core.models import CapturedImage
from core.services.interfaces import IImageResizer

FRAME_PREFIX = "image_"
FRAME_EXT = ".jpg"
FRAME_PATTERN = f"{FRAME_PREFIX}%04d{FRAME_EXT}"


def frame_name(index: int) -> str:
    """Return the file name of frame `index`."""
    return FRAME_PATTERN % index


def list_frames(directory: str | Path) -> list[Path]:
    """Return frame files present in `directory`, sorted by name."""
    path = Path(directory)
    if not path.is_dir():
        return []
    return sorted(path.glob(f"{FRAME_PREFIX}*{FRAME_EXT}"))


def prepare_destination(directory: str | Path) -> Path:
    """Create `directory`, or delete every file directly inside it."""
    path = Path(directory)
    if path.exists():
        removed = 0
        for child in path.iterdir():
            if child.is_file():
                child.unlink()
                removed += 1
        if removed:
            logger.info("Cleared {} existing files from {}", removed, path)
    else:
        path.mkdir(parents=True)
    return path


class FrameSequenceWriter:
    """Writes half-scale copies of ordered images as a gap-free frame sequence."""

    def __init__(self, resizer: IImageResizer, divisor: int = 2) -> None:
        self._resizer = resizer
        self._divisor = divisor

    def write_frames(self, destination: Path, images: Sequence[CapturedImage]) -> int:
        """Write `images` into an already prepared `destination`.

        The frame index only advances on success, so a failed image leaves no
        gap. Returns the number of frames written.
        """
        next_index, written = 0, 0
        total = len(images)
        for position, image in enumerate(images, start=1):
            started = time.perf_counter()
            target = destination / frame_name(next_index)
            try:
                self._resizer.save_scaled(image.source_path, str(target), self._divisor)
            except Exception as ex:  # pylint: disable=broad-exception-caught
                logger.error("Skipping unreadable image {}: {}", image.source_path, ex)
                # A partial write would otherwise linger as the last frame
                target.unlink(missing_ok=True)
                continue
            next_index, written = next_index + 1, written + 1
            logger.info(
                "Finished copying and resizing file: {}. File {}/{}. {:.0f} ms",
                image.file_name,
                position,
                total,
                (time.perf_counter() - started) * 1000,
            )
        return written

    def materialize(self, destination: str | Path, images: Sequence[CapturedImage]) -> int:
        """Clean `destination` and write `images` as `image_NNNN.jpg` frames."""
        path = prepare_destination(destination)
        written = self.write_frames(path, images)
        logger.info("Wrote {} of {} frames to {}", written, len(images), path)
        return written
