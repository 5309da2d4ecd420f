"""Logging initialization utilities using loguru."""

from __future__ import annotations

from pathlib import Path
import sys

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def init_logging(log_dir: str | None = None, level: str = "INFO") -> None:
    """Log to the console and to rotating daily files under `log_dir`."""
    if log_dir is None:
        log_dir = get_log_directory()
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)
    logger.add(
        str(log_path / "app_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
        level=level,
    )


def get_log_directory() -> str:
    """Get the default log directory path."""
    return str(Path.cwd() / "logs")
