"""Per-day timelapse pipeline: ledger gate, frame materialization, encoding.

Each per-day source directory moves through
`UNPROCESSED -> COPIED -> ENCODED -> FINISHED`. The ledger is consulted before
anything destructive happens, so a directory already recorded as finished is
never touched again. Encoder failures are logged and written to the per-day
encode log but do not keep a directory from being marked finished.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
import os
from pathlib import Path
import time

from loguru import logger

from core.models import CapturedImage, DayOutcome, EncodeResult, ProcessingState
from core.services.grouping import chronological, distinct_by_capture_time, group_by_day
from core.services.interfaces import IEncoderRunner, ILedger, MissingSourceDirectoryError
from core.services.timestamp_parser import parse_any_capture_time
from infrastructure.encoder import EncodeLog, FfmpegEncoder, format_command
from infrastructure.frame_sequence import FrameSequenceWriter, list_frames
from infrastructure.image_repository import ImageFileRepository

DAY_DIR_FMT = "%Y-%m-%d"
VIDEO_EXT = ".mp4"


def _subdirectories(root: str) -> list[str]:
    """Names of the directories directly inside `root`, sorted."""
    with os.scandir(root) as it:
        return sorted(entry.name for entry in it if entry.is_dir())


class EncodeOrchestrator:
    """Runs the per-day sweep over a source image tree."""

    def __init__(
        self,
        *,
        source_root: str,
        local_root: str,
        video_dir: str,
        ledger: ILedger,
        repo: ImageFileRepository,
        writer: FrameSequenceWriter,
        encoder: FfmpegEncoder,
        runner: IEncoderRunner,
        encode_log: EncodeLog,
        unsorted_repo: ImageFileRepository | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._source_root = source_root
        self._local_root = local_root
        self._video_dir = video_dir
        self._ledger = ledger
        self._repo = repo
        self._writer = writer
        self._encoder = encoder
        self._runner = runner
        self._encode_log = encode_log
        self._unsorted_repo = unsorted_repo or ImageFileRepository(parse_any_capture_time)
        self._today = today

    def _today_name(self) -> str:
        return self._today().strftime(DAY_DIR_FMT)

    def day_directories(self) -> list[str]:
        """Names of per-day source directories, excluding today's."""
        if not os.path.isdir(self._source_root):
            raise MissingSourceDirectoryError(
                f"SourceImageLocation {self._source_root} does not exist"
            )
        today = self._today_name().lower()
        return [name for name in _subdirectories(self._source_root) if name.lower() != today]

    def run(self) -> list[DayOutcome]:
        """Process every completed day under the source root, in name order."""
        outcomes = [self.process_day(day) for day in self.day_directories()]
        done = sum(1 for o in outcomes if not o.skipped)
        logger.info("Sweep finished: {} processed, {} skipped", done, len(outcomes) - done)
        return outcomes

    def process_day(self, day: str) -> DayOutcome:
        """Drive one source directory through the state machine."""
        source_dir = os.path.join(self._source_root, day)
        ledger_key = os.path.abspath(source_dir)
        if self._ledger.is_finished(ledger_key):
            logger.info("Skipping copy files and resize for directory {}", source_dir)
            return DayOutcome(day=day, state=ProcessingState.FINISHED, skipped=True)

        if not os.path.isdir(source_dir):
            raise MissingSourceDirectoryError(f"SourceImageLocation {source_dir} does not exist")

        destination = os.path.join(self._local_root, day)
        images = chronological(group_by_day(self._repo.load_directory(source_dir)))
        logger.info("Total files in source directory {}: {}", source_dir, len(images))
        outcome = DayOutcome(day=day)
        outcome.frames_written = self._writer.materialize(destination, images)
        outcome.state = ProcessingState.COPIED

        outcome.encode_result = self.encode_day(destination, day)
        outcome.state = ProcessingState.ENCODED

        self._ledger.mark_finished(ledger_key)
        outcome.state = ProcessingState.FINISHED
        return outcome

    def video_path(self, day: str) -> Path:
        return Path(self._video_dir) / f"{day}{VIDEO_EXT}"

    def encode_day(self, frame_dir: str, day: str) -> EncodeResult | None:
        """Encode `frame_dir` into `<video_dir>/<day>.mp4`.

        Returns None when encoding was skipped because the video already
        exists or there are no frames.
        """
        Path(self._video_dir).mkdir(parents=True, exist_ok=True)
        output = self.video_path(day)
        if output.exists():
            logger.info("Movie already exists for savePath {}", output)
            return None
        if not list_frames(frame_dir):
            logger.info("No files to create movie in directory {}", frame_dir)
            return None

        args = self._encoder.build_command(frame_dir, output)
        logger.info("Running encoder: {}", format_command(args))
        started = time.perf_counter()
        result = self._runner.run(args)
        elapsed_ms = (time.perf_counter() - started) * 1000
        log_path = self._encode_log.record(day, args, result, elapsed_ms)

        if result.succeeded:
            logger.info("Finished creating movie {} in {:.0f} ms", output, elapsed_ms)
        else:
            logger.error(
                "Encoder exited with code {} for {}; see {}", result.exit_code, day, log_path
            )
        return result

    def run_unsorted(self, unsorted_root: str) -> list[DayOutcome]:
        """Sort a flat dump of timestamped images into per-day frames, then encode.

        Dates that already have a local frame directory, and today, are left
        alone; afterwards every local day directory is offered to the encoder.
        """
        if not os.path.isdir(unsorted_root):
            raise MissingSourceDirectoryError(
                f"UnsortedImagesDirectory {unsorted_root} does not exist"
            )
        images: list[CapturedImage] = sorted(
            distinct_by_capture_time(
                self._unsorted_repo.load_directory(unsorted_root, recursive=True)
            ),
            key=lambda it: it.captured_at,
        )

        Path(self._local_root).mkdir(parents=True, exist_ok=True)
        existing = set(_subdirectories(self._local_root))
        today = self._today_name()
        pending = [
            it
            for it in images
            if it.capture_date.strftime(DAY_DIR_FMT) not in existing
            and it.capture_date.strftime(DAY_DIR_FMT) != today
        ]
        logger.info("Total files in directory {}: {}", unsorted_root, len(pending))

        outcomes: list[DayOutcome] = []
        for day_date, group in group_by_day(pending).items():
            day = day_date.strftime(DAY_DIR_FMT)
            written = self._writer.materialize(os.path.join(self._local_root, day), group.images)
            outcomes.append(
                DayOutcome(day=day, state=ProcessingState.COPIED, frames_written=written)
            )

        by_day = {o.day: o for o in outcomes}
        for day in _subdirectories(self._local_root):
            outcome = by_day.get(day)
            if outcome is None:
                outcome = DayOutcome(day=day, state=ProcessingState.COPIED)
                outcomes.append(outcome)
            outcome.encode_result = self.encode_day(os.path.join(self._local_root, day), day)
            outcome.state = ProcessingState.ENCODED
        return outcomes
