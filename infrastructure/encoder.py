"""ffmpeg invocation and per-day encode logs.

The command is passed to `subprocess.run` as an argument list, so no shell
wrapper is involved on any platform; `ffmpeg_path` points at the binary when
it is not on PATH.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
import shlex
import subprocess

from loguru import logger

from core.models import EncodeResult
from core.services.interfaces import IEncoderRunner
from infrastructure.frame_sequence import FRAME_PATTERN

DEFAULT_FRAMERATE = 30
DEFAULT_CODEC = "libx264"
ENCODE_LOG_FMT = "createOutput_{day}.log"


class FfmpegEncoder:
    """Builds fixed-framerate H.264 encode commands over a frame directory."""

    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        framerate: int = DEFAULT_FRAMERATE,
        codec: str = DEFAULT_CODEC,
    ) -> None:
        self.ffmpeg_path = ffmpeg_path
        self.framerate = int(framerate)
        self.codec = codec

    def input_pattern(self, frame_dir: str | Path) -> str:
        return str(Path(frame_dir) / FRAME_PATTERN)

    def build_command(self, frame_dir: str | Path, output_path: str | Path) -> list[str]:
        """Return the argument list encoding `frame_dir` into `output_path`."""
        return [
            self.ffmpeg_path,
            "-framerate",
            str(self.framerate),
            "-i",
            self.input_pattern(frame_dir),
            "-c:v",
            self.codec,
            "-r",
            str(self.framerate),
            str(output_path),
        ]


class SubprocessEncoderRunner(IEncoderRunner):
    """Runs the encoder as a blocking child process, capturing its output.

    No timeout is applied. A binary that cannot be started is reported as a
    failed `EncodeResult` rather than raised.
    """

    def run(self, args: Sequence[str]) -> EncodeResult:
        cmd = [str(a) for a in args]
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as ex:
            logger.error("Failed to start encoder {}: {}", cmd[0], ex)
            return EncodeResult(exit_code=-1, stdout="", stderr=str(ex))
        return EncodeResult(exit_code=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)


def format_command(args: Sequence[str]) -> str:
    """Render `args` as a copy-pasteable command line."""
    return shlex.join(str(a) for a in args)


class EncodeLog:
    """Appends encoder transcripts to one log file per day."""

    def __init__(self, log_dir: str | Path = ".") -> None:
        self._dir = Path(log_dir)

    def path_for(self, day: str) -> Path:
        return self._dir / ENCODE_LOG_FMT.format(day=day)

    def append(self, day: str, text: str) -> Path:
        """Append `text` to the log for `day`; I/O errors propagate."""
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(day)
        with path.open("a", encoding="utf-8") as f:
            f.write(text)
        return path

    def record(
        self, day: str, args: Sequence[str], result: EncodeResult, elapsed_ms: float
    ) -> Path:
        """Write the command line, captured output and outcome for one run."""
        lines = [
            format_command(args),
            result.stdout.rstrip("\n"),
            result.stderr.rstrip("\n"),
            f"exitCode: {result.exit_code}",
            f"elapsedMillis: {elapsed_ms:.0f}",
            "",
        ]
        return self.append(day, "\n".join(lines) + "\n")
