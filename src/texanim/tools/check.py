"""
External tool discovery for texanim.

ImageMagick is preferred; FFmpeg is the fallback backend. Discovery order:
`magick -version`, `convert -version`, the MAGICK_PATH variable, well-known
installation paths, and finally `ffmpeg -version`.
"""

from __future__ import annotations

from pathlib import Path

from ..config import ToolSettings
from ..core.types import ToolKind, ToolResolution
from ..output.logger import SimpleLogger
from ..utils.subprocess import run_subprocess


def version_ok(command: str, timeout: int) -> bool:
    """Return True when `<command> -version` exits successfully."""
    code, _ = run_subprocess([command, "-version"], timeout=timeout)
    return code == 0


def discover_tools(settings: ToolSettings, logger: SimpleLogger | None = None) -> ToolResolution | None:
    """Find a usable backend, stopping at the first hit.

    Args:
        settings: Tool names, MAGICK_PATH and search paths
        logger: Optional logger for discovery messages

    Returns:
        ToolResolution, or None when neither ImageMagick nor FFmpeg is usable
    """
    def note(message: str) -> None:
        if logger is not None:
            logger.info(message)

    timeout = settings.version_timeout_sec

    if version_ok(settings.magick_command, timeout):
        note("ImageMagick detected")
        return ToolResolution(ToolKind.MAGICK, settings.magick_command, settings.ffmpeg_command)

    if version_ok(settings.legacy_magick_command, timeout):
        note(f"ImageMagick detected ({settings.legacy_magick_command})")
        return ToolResolution(ToolKind.MAGICK_CONVERT, settings.legacy_magick_command, settings.ffmpeg_command)

    if settings.magick_path is not None:
        if Path(settings.magick_path).is_file():
            note(f"ImageMagick found via MAGICK_PATH: {settings.magick_path}")
            return ToolResolution(ToolKind.MAGICK_PATH, str(settings.magick_path), settings.ffmpeg_command)
        note(f"MAGICK_PATH points to non-existent file: {settings.magick_path}")

    for candidate in settings.search_paths:
        if Path(candidate).is_file():
            note(f"ImageMagick found at: {candidate}")
            return ToolResolution(ToolKind.MAGICK_PATH, str(candidate), settings.ffmpeg_command)

    if version_ok(settings.ffmpeg_command, timeout):
        note("FFmpeg detected")
        return ToolResolution(ToolKind.FFMPEG, None, settings.ffmpeg_command)

    return None


def check_tools(settings: ToolSettings) -> tuple[bool, list[str]]:
    """Check availability of the external tools.

    ImageMagick is reported missing only when the whole discovery chain
    fails; FFmpeg is checked on its own since it backs every fallback.

    Args:
        settings: Tool discovery settings

    Returns:
        Tuple[bool, List[str]]: (all_ok, problems). `all_ok` is True when at
        least one backend is usable; problems lists every missing tool.
    """
    problems: list[str] = []
    resolution = discover_tools(settings)
    if resolution is None or resolution.magick is None:
        problems.append("ImageMagick not found (magick, convert, MAGICK_PATH, common install paths)")
    if not version_ok(settings.ffmpeg_command, settings.version_timeout_sec):
        problems.append(f"{settings.ffmpeg_command} not found in PATH")
    return (resolution is not None, problems)
