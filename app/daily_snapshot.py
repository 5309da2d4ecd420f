"""Batch job saving one representative photo (and thumbnail) per day."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from core.models import SelectionResult
from core.services.grouping import group_by_day
from core.services.interfaces import IImageResizer, MissingSourceDirectoryError
from core.services.nearest_time import DEFAULT_TARGET_HOUR, NearestTimeSelector
from core.services.timestamp_parser import format_snapshot_name
from infrastructure.image_repository import ImageFileRepository
from infrastructure.image_service import DEFAULT_THUMBNAIL_HEIGHT


class DailySnapshotJob:
    """Selects the image nearest to `target_hour` for every day of a corpus.

    For each selected image a half-scale copy `<stamp>.jpg` and a fixed-height
    thumbnail `<stamp>_thumb.jpg` are written to `output_dir`, where `<stamp>`
    is `YYYY-MM-DDTHHMMSS`. A failure while saving one day is logged and the
    job moves on to the next day.
    """

    def __init__(
        self,
        *,
        repo: ImageFileRepository,
        resizer: IImageResizer,
        output_dir: str,
        selector: NearestTimeSelector | None = None,
        target_hour: int = DEFAULT_TARGET_HOUR,
        thumbnail_height: int = DEFAULT_THUMBNAIL_HEIGHT,
    ) -> None:
        self._repo = repo
        self._resizer = resizer
        self._output_dir = Path(output_dir)
        self._selector = selector or NearestTimeSelector()
        self._target_hour = target_hour
        self._thumbnail_height = thumbnail_height

    def run(self, source_root: str) -> list[SelectionResult]:
        """Scan `source_root` recursively and save one snapshot per day."""
        if not os.path.isdir(source_root):
            raise MissingSourceDirectoryError(f"Snapshot source {source_root} does not exist")
        self._output_dir.mkdir(parents=True, exist_ok=True)

        groups = group_by_day(self._repo.load_directory(source_root, recursive=True))
        results = self._selector.select(groups.values(), self._target_hour)

        saved = 0
        for result in results:
            if result.chosen is None:
                logger.info("No image to keep for {}", result.date)
                continue
            stamp = format_snapshot_name(result.chosen.captured_at)
            half_path = self._output_dir / f"{stamp}.jpg"
            try:
                self._resizer.save_scaled(result.chosen.source_path, str(half_path))
                self._resizer.save_thumbnail(
                    result.chosen.source_path,
                    str(self._output_dir / f"{stamp}_thumb.jpg"),
                    self._thumbnail_height,
                )
            except Exception as ex:  # pylint: disable=broad-exception-caught
                logger.error("Snapshot for {} failed ({}): {}", result.date, stamp, ex)
                half_path.unlink(missing_ok=True)
                continue
            saved += 1
            logger.info("Saved snapshot {} for {}", stamp, result.date)

        logger.info("Snapshot job finished: {} of {} days saved", saved, len(results))
        return results
