"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


def _path_setting(settings: JsonSettings, key: str, default: str) -> str:
    raw = settings.get(key, default)
    if not isinstance(raw, str) or not raw.strip():
        raw = default
    return os.path.expanduser(os.path.expandvars(raw))


def _int_setting(settings: JsonSettings, key: str, default: int) -> int:
    try:
        return int(settings.get(key, default))
    except (ValueError, TypeError):
        return default


@dataclass
class AppSettings:
    """Typed view of `settings.json` with defaults for every key."""

    source_image_location: str = "images/source"
    local_image_location: str = "images/local"
    mp4_output_directory: str = "videos"
    unsorted_images_directory: str = "images/unsorted"
    snapshot_source_directory: str = "images/source"
    snapshot_output_directory: str = "1400HourFiles"
    finished_paths_log: str = "finishedPaths.log"
    encode_log_directory: str = "."
    ffmpeg_path: str = "ffmpeg"
    framerate: int = 30
    codec: str = "libx264"
    interval_seconds: int = 3600
    target_hour: int = 14
    thumbnail_height: int = 200
    log_directory: str = "logs"
    log_level: str = "INFO"

    @classmethod
    def from_settings(cls, settings: JsonSettings) -> AppSettings:
        d = cls()
        return cls(
            source_image_location=_path_setting(
                settings, "paths.source_image_location", d.source_image_location
            ),
            local_image_location=_path_setting(
                settings, "paths.local_image_location", d.local_image_location
            ),
            mp4_output_directory=_path_setting(
                settings, "paths.mp4_output_directory", d.mp4_output_directory
            ),
            unsorted_images_directory=_path_setting(
                settings, "paths.unsorted_images_directory", d.unsorted_images_directory
            ),
            snapshot_source_directory=_path_setting(
                settings, "paths.snapshot_source_directory", d.snapshot_source_directory
            ),
            snapshot_output_directory=_path_setting(
                settings, "paths.snapshot_output_directory", d.snapshot_output_directory
            ),
            finished_paths_log=_path_setting(
                settings, "paths.finished_paths_log", d.finished_paths_log
            ),
            encode_log_directory=_path_setting(
                settings, "paths.encode_log_directory", d.encode_log_directory
            ),
            ffmpeg_path=_path_setting(settings, "encoder.ffmpeg_path", d.ffmpeg_path),
            framerate=_int_setting(settings, "encoder.framerate", d.framerate),
            codec=str(settings.get("encoder.codec", d.codec) or d.codec),
            interval_seconds=_int_setting(
                settings, "schedule.interval_seconds", d.interval_seconds
            ),
            target_hour=_int_setting(settings, "snapshot.target_hour", d.target_hour),
            thumbnail_height=_int_setting(
                settings, "snapshot.thumbnail_height", d.thumbnail_height
            ),
            log_directory=_path_setting(settings, "logging.directory", d.log_directory),
            log_level=str(settings.get("logging.level", d.log_level) or d.log_level).upper(),
        )
