"""
Pipeline driver for texanim.

Every pipeline follows the same shape: validate the input directory, build work
items, then convert them one at a time with the primary backend, retrying once
with the fallback backend. A failed item is counted and skipped; it never stops
the batch.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..config import AppConfig
from ..core.errors import BackendError, FatalSetupError
from ..core.types import BackendResult, Err, Ok, RunSummary, ToolResolution
from ..output.logger import SimpleLogger
from ..utils.path import group_by_base_name, list_frames
from .backends import (
    Backend,
    FFmpegAnimateBackend,
    FFmpegTransparencyBackend,
    MagickAnimateBackend,
    MagickTransparencyBackend,
)


EXTRACTOR_HINT = "Run the extractor first to generate textures."
TRANSPARENCY_HINT = "Run the transparency pipeline first to create transparent textures."


@dataclass(frozen=True)
class WorkItem:
    """One unit of conversion: an output name and its ordered input files."""

    name: str
    frames: list[Path]


def convert_with_fallback(
    item: WorkItem,
    output_dir: Path,
    primary: Backend,
    fallback: Backend | None,
    logger: SimpleLogger | None = None,
) -> BackendResult:
    """Run the primary backend; on failure run the fallback exactly once."""
    first = primary.invoke(item.name, item.frames, output_dir)
    if isinstance(first, Ok) or fallback is None:
        return first

    if logger is not None:
        logger.warning(f"{primary.label} failed for {item.name}, trying {fallback.label}...")
    second = fallback.invoke(item.name, item.frames, output_dir)
    if isinstance(second, Ok):
        return second

    combined = BackendError(
        f"{primary.label}/{fallback.label}",
        f"{first.reason}; {second.reason}",
        second.error.returncode,
    )
    return Err(combined)


def process_items(
    items: Sequence[WorkItem],
    output_dir: Path,
    primary: Backend,
    fallback: Backend | None,
    logger: SimpleLogger,
    describe: str = "frames",
) -> RunSummary:
    """Convert items sequentially, aggregating successes and failures."""
    summary = RunSummary()
    total = len(items)

    for i, item in enumerate(items, 1):
        result = convert_with_fallback(item, output_dir, primary, fallback, logger)
        if isinstance(result, Ok):
            summary.succeeded += 1
            summary.outputs.append(result.path)
            logger.success(f"[{i:02d}/{total}] Created: {result.path.name} ({len(item.frames)} {describe})")
        else:
            summary.failed += 1
            summary.failures.append(item.name)
            logger.error(f"[{i:02d}/{total}] Failed: {item.name} -> {result.reason}")

    return summary


def require_input_dir(input_dir: Path, hint: str) -> None:
    if not input_dir.is_dir():
        raise FatalSetupError(f"Input directory not found: {input_dir}. {hint}")


def require_tools(resolution: ToolResolution | None) -> ToolResolution:
    if resolution is None:
        raise FatalSetupError("No image processing tools found. Install ImageMagick or FFmpeg.")
    return resolution


def show_groups(items: Sequence[WorkItem], logger: SimpleLogger, limit: int, title: str) -> None:
    """List discovered sequences, truncated after `limit` rows."""
    rows = [[f"{idx:02d}", item.name, str(len(item.frames))] for idx, item in enumerate(items[:limit], 1)]
    logger.table(["#", "Sequence", "Frames"], rows, title=title)
    if len(items) > limit:
        logger.log(f"... and {len(items) - limit} more")


def _sequence_items(input_dir: Path, config: AppConfig) -> list[WorkItem]:
    groups = group_by_base_name(input_dir, config.sequence.frame_ext, config.sequence.min_sequence_frames)
    return [WorkItem(name=name, frames=group.paths) for name, group in groups.items()]


def _backend_kwargs(config: AppConfig, logger: SimpleLogger, verbose: bool) -> dict:
    return {"timeout_sec": config.tools.timeout_sec, "logger": logger, "verbose": verbose}


def create_gifs(
    config: AppConfig,
    resolution: ToolResolution | None,
    logger: SimpleLogger,
    *,
    input_dir: Path | None = None,
    output_dir: Path | None = None,
    verbose: bool = False,
) -> RunSummary:
    """Turn every `<base>_<n>.png` sequence into `<base>.gif`."""
    input_dir = input_dir or config.paths.textures_dir
    output_dir = output_dir or config.paths.gifs_dir

    require_input_dir(input_dir, EXTRACTOR_HINT)
    resolution = require_tools(resolution)

    logger.info("Scanning for texture sequences...")
    items = _sequence_items(input_dir, config)
    if not items:
        logger.info("No image sequences found.")
        return RunSummary()

    show_groups(items, logger, config.sequence.preview_limit, f"Found {len(items)} texture sequences")
    output_dir.mkdir(parents=True, exist_ok=True)

    kwargs = _backend_kwargs(config, logger, verbose)
    primary = MagickAnimateBackend(resolution, config.gif, **kwargs)
    fallback = FFmpegAnimateBackend(resolution, config.gif, **kwargs)

    logger.section(f"Creating {len(items)} animated GIFs")
    return process_items(items, output_dir, primary, fallback, logger)


def make_transparent(
    config: AppConfig,
    resolution: ToolResolution | None,
    logger: SimpleLogger,
    *,
    input_dir: Path | None = None,
    output_dir: Path | None = None,
    verbose: bool = False,
) -> RunSummary:
    """Key near-black out of every texture, keeping the file name."""
    input_dir = input_dir or config.paths.textures_dir
    output_dir = output_dir or config.paths.transparent_dir

    require_input_dir(input_dir, EXTRACTOR_HINT)
    resolution = require_tools(resolution)

    logger.info(f"Scanning for {config.sequence.frame_ext.upper().lstrip('.')} files...")
    items = [WorkItem(name=p.stem, frames=[p]) for p in list_frames(input_dir, config.sequence.frame_ext)]
    if not items:
        logger.info(f"No {config.sequence.frame_ext} files found.")
        return RunSummary()

    logger.info(f"Found {len(items)} texture files to process")
    output_dir.mkdir(parents=True, exist_ok=True)

    kwargs = _backend_kwargs(config, logger, verbose)
    primary = MagickTransparencyBackend(resolution, config.transparency, **kwargs)
    fallback = FFmpegTransparencyBackend(resolution, config.transparency, **kwargs)

    logger.section(f"Processing {len(items)} images for transparency")
    return process_items(items, output_dir, primary, fallback, logger, describe="image")


def create_transparent_gifs(
    config: AppConfig,
    resolution: ToolResolution | None,
    logger: SimpleLogger,
    *,
    input_dir: Path | None = None,
    output_dir: Path | None = None,
    verbose: bool = False,
) -> RunSummary:
    """Animate the transparent textures, keeping their alpha."""
    input_dir = input_dir or config.paths.transparent_dir
    output_dir = output_dir or config.paths.transparent_gifs_dir

    require_input_dir(input_dir, TRANSPARENCY_HINT)
    resolution = require_tools(resolution)

    logger.info("Scanning for transparent texture sequences...")
    items = _sequence_items(input_dir, config)
    if not items:
        logger.info("No transparent image sequences found.")
        return RunSummary()

    show_groups(items, logger, config.sequence.preview_limit, f"Found {len(items)} transparent texture sequences")
    output_dir.mkdir(parents=True, exist_ok=True)

    kwargs = _backend_kwargs(config, logger, verbose)
    primary = MagickAnimateBackend(resolution, config.transparent_gif, **kwargs)
    fallback = FFmpegAnimateBackend(resolution, config.transparent_gif, **kwargs)

    logger.section(f"Creating {len(items)} transparent animated GIFs")
    return process_items(items, output_dir, primary, fallback, logger, describe="frames with transparency")
