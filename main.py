from __future__ import annotations

from pathlib import Path

import click
from loguru import logger

from app.daily_snapshot import DailySnapshotJob
from app.encode_orchestrator import EncodeOrchestrator
from app.poll_loop import PollLoop
from infrastructure.encoder import EncodeLog, FfmpegEncoder, SubprocessEncoderRunner
from infrastructure.frame_sequence import FrameSequenceWriter
from infrastructure.image_repository import ImageFileRepository
from infrastructure.image_service import ImageService
from infrastructure.ledger import FinishedPathsLedger
from infrastructure.logging import init_logging
from infrastructure.settings import AppSettings, JsonSettings


BASE_DIR = Path(__file__).parent


def build_orchestrator(cfg: AppSettings) -> EncodeOrchestrator:
    images = ImageService()
    return EncodeOrchestrator(
        source_root=cfg.source_image_location,
        local_root=cfg.local_image_location,
        video_dir=cfg.mp4_output_directory,
        ledger=FinishedPathsLedger(cfg.finished_paths_log),
        repo=ImageFileRepository(),
        writer=FrameSequenceWriter(images),
        encoder=FfmpegEncoder(cfg.ffmpeg_path, cfg.framerate, cfg.codec),
        runner=SubprocessEncoderRunner(),
        encode_log=EncodeLog(cfg.encode_log_directory),
    )


def build_snapshot_job(cfg: AppSettings) -> DailySnapshotJob:
    return DailySnapshotJob(
        repo=ImageFileRepository(),
        resizer=ImageService(),
        output_dir=cfg.snapshot_output_directory,
        target_hour=cfg.target_hour,
        thumbnail_height=cfg.thumbnail_height,
    )


@click.group()
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=BASE_DIR / "settings.json",
    show_default=True,
    help="Path to settings.json.",
)
@click.pass_context
def cli(ctx: click.Context, settings_path: Path) -> None:
    """Build daily timelapse videos from timestamp-named photos."""
    cfg = AppSettings.from_settings(JsonSettings(settings_path))
    init_logging(cfg.log_directory, cfg.log_level)
    logger.info("Loaded settings from {}", settings_path)
    ctx.obj = cfg


@cli.command()
@click.option("--no-snapshots", is_flag=True, help="Skip the startup snapshot job.")
@click.option("--max-runs", type=int, default=None, help="Stop after this many sweeps.")
@click.pass_obj
def run(cfg: AppSettings, no_snapshots: bool, max_runs: int | None) -> None:
    """Snapshot job once, then the per-day sweep every interval."""
    if not no_snapshots:
        build_snapshot_job(cfg).run(cfg.snapshot_source_directory)
    orchestrator = build_orchestrator(cfg)
    PollLoop(orchestrator.run, cfg.interval_seconds).run(max_runs=max_runs)


@cli.command()
@click.pass_obj
def once(cfg: AppSettings) -> None:
    """Run a single per-day sweep."""
    outcomes = build_orchestrator(cfg).run()
    for outcome in outcomes:
        click.echo(f"{outcome.day}\t{outcome.state.value}\t{outcome.frames_written}")


@cli.command()
@click.pass_obj
def snapshots(cfg: AppSettings) -> None:
    """Save the photo nearest the target hour for every day."""
    results = build_snapshot_job(cfg).run(cfg.snapshot_source_directory)
    for result in results:
        click.echo(f"{result.date}\t{result.chosen.file_name if result.chosen else '-'}")


@cli.command()
@click.pass_obj
def unsorted(cfg: AppSettings) -> None:
    """Sort epoch-named photos into day directories and encode them."""
    outcomes = build_orchestrator(cfg).run_unsorted(cfg.unsorted_images_directory)
    for outcome in outcomes:
        click.echo(f"{outcome.day}\t{outcome.state.value}\t{outcome.frames_written}")


if __name__ == "__main__":
    cli()
