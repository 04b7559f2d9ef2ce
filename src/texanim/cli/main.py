#!/usr/bin/env python3
"""
texanim: Convert extracted texture frame sequences to animated and transparent GIFs.

Pipelines:
- gifs: `<base>_<n>.png` sequences -> `<base>.gif`
- transparency: every PNG -> same PNG with near-black keyed out
- transparent-gifs: transparent sequences -> `<base>.gif` with alpha
- all: transparency, transparent-gifs, then gifs

ImageMagick is used when available, FFmpeg otherwise or when ImageMagick fails.
"""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from ..config import AppConfig, create_config_from_env
from ..core.errors import FatalSetupError
from ..core.types import RunSummary, ToolResolution
from ..output.logger import SimpleLogger
from ..processing.pipeline import (
    EXTRACTOR_HINT,
    TRANSPARENCY_HINT,
    create_gifs,
    create_transparent_gifs,
    make_transparent,
    require_input_dir,
)
from ..tools.check import check_tools, discover_tools

PIPELINES = {
    "gifs": create_gifs,
    "transparency": make_transparent,
    "transparent-gifs": create_transparent_gifs,
}

INSTALL_HINTS = [
    "ImageMagick: https://imagemagick.org/script/download.php",
    "FFmpeg: https://ffmpeg.org/download.html",
    "Or use: winget install ImageMagick.ImageMagick",
    "An installed ImageMagick outside PATH can be given with MAGICK_PATH",
]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    p = argparse.ArgumentParser(
        prog="texanim",
        description="Convert texture frame sequences to animated GIFs and transparent PNG/GIF variants.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--log-file", type=Path, help="Append log lines to this file")
    p.add_argument("--timeout", type=int, help="Timeout in seconds per external tool call")
    p.add_argument("-v", "--verbose", action="store_true", help="Print every external command")
    p.add_argument("--check-tools", action="store_true", help="Verify external tools and exit")

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    for name, help_text in [
        ("gifs", "Create animated GIFs from texture sequences"),
        ("transparency", "Make near-black pixels of every texture transparent"),
        ("transparent-gifs", "Create animated GIFs from transparent textures"),
    ]:
        sp = sub.add_parser(name, help=help_text, formatter_class=argparse.ArgumentDefaultsHelpFormatter)
        sp.add_argument("-i", "--input-dir", type=Path, help="Input directory (default from settings)")
        sp.add_argument("-o", "--output-dir", type=Path, help="Output directory (default from settings)")
    sp = sub.add_parser("all", help="Run transparency, transparent-gifs and gifs in order")
    sp.add_argument("-i", "--input-dir", type=Path, help="Textures directory (default from settings)")

    args = p.parse_args(argv)
    if not args.check_tools and args.command is None:
        p.error("a command is required")
    return args


def build_config(args: argparse.Namespace) -> AppConfig:
    """Create the run configuration from the environment and CLI overrides."""
    config = create_config_from_env()
    tools = config.resolved_tools()
    if args.timeout is not None:
        tools = tools.model_copy(update={"timeout_sec": max(1, args.timeout)})
    config = config.model_copy(update={"tools": tools})

    if args.command == "all" and args.input_dir is not None:
        paths = config.paths.model_copy(update={"textures_dir": args.input_dir})
        config = config.model_copy(update={"paths": paths})
    return config


def input_dir_for(args: argparse.Namespace, config: AppConfig) -> Path:
    """Directory the selected command reads first."""
    if getattr(args, "input_dir", None) is not None:
        return args.input_dir
    if args.command == "transparent-gifs":
        return config.paths.transparent_dir
    return config.paths.textures_dir


def input_hint_for(args: argparse.Namespace) -> str:
    """What to run first when the input directory is missing."""
    if args.command == "transparent-gifs":
        return TRANSPARENCY_HINT
    return EXTRACTOR_HINT


def print_run_header(logger: SimpleLogger, args: argparse.Namespace, config: AppConfig) -> None:
    """Print the run configuration."""
    logger.section("texanim: Descent texture converter")
    rows = [
        ["Command:", args.command],
        ["Input:", str(input_dir_for(args, config))],
        ["Timeout:", f"{config.tools.timeout_sec}s per tool call"],
    ]
    for label, value in rows:
        logger.log(f"{label:<12} {value}")


def print_summary(logger: SimpleLogger, results: dict[str, RunSummary], elapsed: float) -> None:
    """Print the success/failure tally of every pipeline that ran."""
    rows: list[tuple[str, str]] = []
    for name, summary in results.items():
        line = f"{summary.succeeded} created"
        if summary.failed:
            line += f", {summary.failed} failed"
        rows.append((f"{name}:", line))
    rows.append(("Total Time:", f"{elapsed:.1f}s"))
    logger.summary("Summary", rows)

    for name, summary in results.items():
        if summary.failures:
            logger.warning(f"{name} failed items: {', '.join(summary.failures)}")


def resolve_tools(config: AppConfig, logger: SimpleLogger) -> ToolResolution:
    """Discover tools once; report install hints when nothing is usable."""
    resolution = discover_tools(config.tools, logger)
    if resolution is None:
        logger.error("No image processing tools found.")
        for hint in INSTALL_HINTS:
            logger.log(f"   {hint}")
        raise FatalSetupError("No image processing tools found. Install ImageMagick or FFmpeg.")
    return resolution


def run_command(
    args: argparse.Namespace,
    config: AppConfig,
    resolution: ToolResolution,
    logger: SimpleLogger,
) -> dict[str, RunSummary]:
    """Dispatch to one pipeline, or all of them in dependency order."""
    results: dict[str, RunSummary] = {}
    if args.command == "all":
        for name in ("transparency", "transparent-gifs", "gifs"):
            if name == "transparent-gifs" and not config.paths.transparent_dir.is_dir():
                logger.info("No transparent textures to animate.")
                results[name] = RunSummary()
                continue
            results[name] = PIPELINES[name](config, resolution, logger, verbose=args.verbose)
        return results

    results[args.command] = PIPELINES[args.command](
        config,
        resolution,
        logger,
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        verbose=args.verbose,
    )
    return results


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    config = build_config(args)
    logger = SimpleLogger(args.log_file)

    if args.check_tools:
        ok, problems = check_tools(config.tools)
        report = logger.warning if ok else logger.error
        for p in problems:
            report(f"Missing: {p}")
        if ok:
            logger.success("Tools OK")
            return 0
        return 1

    print_run_header(logger, args, config)
    t0 = time.time()

    try:
        require_input_dir(input_dir_for(args, config), input_hint_for(args))
        resolution = resolve_tools(config, logger)
        results = run_command(args, config, resolution, logger)
    except FatalSetupError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        return 130

    print_summary(logger, results, time.time() - t0)
    return 0


if __name__ == "__main__":
    sys.exit(main())
