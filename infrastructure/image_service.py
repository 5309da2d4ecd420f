"""Pillow-backed image loading, resizing and saving.

Implements `IImageResizer` for the frame sequence writer and the daily
snapshot job. Decode errors surface as `OSError` (including Pillow's
`UnidentifiedImageError`) or `ValueError`; callers decide whether to skip.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from PIL import Image

from core.services.interfaces import IImageResizer

DEFAULT_JPEG_QUALITY = 90
DEFAULT_THUMBNAIL_HEIGHT = 200

_RESAMPLE = Image.Resampling.BICUBIC


def thumbnail_size(width: int, height: int, target_height: int) -> tuple[int, int]:
    """Return (width, target_height) keeping the aspect ratio of `width`x`height`."""
    if height <= 0:
        raise ValueError(f"Invalid source height: {height}")
    ratio = height / target_height
    return int(round(width / ratio)), target_height


class ImageService(IImageResizer):
    """Load, resize and save still images."""

    def __init__(self, quality: int = DEFAULT_JPEG_QUALITY) -> None:
        self._quality = int(quality)

    def load(self, path: str) -> Image.Image:
        """Decode `path` fully into memory."""
        with Image.open(path) as im:
            im.load()
            return im.copy()

    def resize(self, image: Image.Image, width: int, height: int) -> Image.Image:
        """Return `image` resized to exactly `width`x`height`."""
        return image.resize((width, height), _RESAMPLE)

    def save(self, image: Image.Image, path: str) -> None:
        """Save `image` as JPEG, creating the parent directory when needed."""
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        image.save(path, "JPEG", quality=self._quality)

    def save_scaled(self, source_path: str, dest_path: str, divisor: int = 2) -> tuple[int, int]:
        """Save `source_path` with both sides integer-divided by `divisor`."""
        image = self.load(source_path)
        width, height = image.width // divisor, image.height // divisor
        self.save(self.resize(image, width, height), dest_path)
        logger.debug("Saved {}x{} copy of {} to {}", width, height, source_path, dest_path)
        return width, height

    def save_thumbnail(
        self, source_path: str, dest_path: str, height: int = DEFAULT_THUMBNAIL_HEIGHT
    ) -> tuple[int, int]:
        """Save a thumbnail of fixed `height` with proportional width."""
        image = self.load(source_path)
        width, height = thumbnail_size(image.width, image.height, height)
        self.save(self.resize(image, width, height), dest_path)
        logger.debug("Saved {}x{} thumbnail of {} to {}", width, height, source_path, dest_path)
        return width, height
