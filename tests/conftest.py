"""Shared fixtures for pipeline tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from PIL import Image
import pytest

from core.models import CapturedImage, EncodeResult


def captured(stamp: str, path: str | None = None) -> CapturedImage:
    """Build a CapturedImage from `YYYY-mm-dd HH:MM:SS`."""
    captured_at = datetime.strptime(stamp, "%Y-%m-%d %H:%M:%S")
    name = captured_at.strftime("%Y-%m-%d %H%M%S") + ".jpg"
    return CapturedImage(
        source_path=path or f"/src/{name}", file_name=name, captured_at=captured_at
    )


@pytest.fixture
def make_jpeg() -> Callable[..., Path]:
    """Write a small solid-colour JPEG and return its path."""

    def _make(path: Path, size: tuple[int, int] = (40, 30), color=(200, 80, 40)) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color).save(path, "JPEG")
        return path

    return _make


class FakeRunner:
    """Encoder runner that records calls instead of spawning ffmpeg."""

    def __init__(self, result: EncodeResult | None = None) -> None:
        self.calls: list[list[str]] = []
        self.result = result or EncodeResult(exit_code=0, stdout="", stderr="frame=3 fps=0.0")

    def run(self, args):
        self.calls.append(list(args))
        # Emulate ffmpeg producing the output file
        if self.result.exit_code == 0:
            Path(args[-1]).write_bytes(b"mp4")
        return self.result


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
