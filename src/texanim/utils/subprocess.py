"""Subprocess and external command utilities."""

from __future__ import annotations

import contextlib
import shlex
import subprocess
from pathlib import Path


def format_cmd(cmd: list[str]) -> str:
    """Shell-quoted rendering of an argument vector, for logs only."""
    return " ".join(shlex.quote(c) for c in cmd)


def run_subprocess(cmd: list[str], *, timeout: int | None = None) -> tuple[int | None, str]:
    """Run subprocess command with proper error handling.

    Args:
        cmd: Command and arguments list
        timeout: Optional timeout in seconds

    Returns:
        Tuple of (return_code, stderr_output). The return code is None when
        the executable could not be started or was killed on timeout.
    """
    try:
        result = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
        return result.returncode, result.stderr
    except subprocess.TimeoutExpired:
        return None, f"Command timed out after {timeout} seconds"
    except OSError as e:
        return None, str(e)


def write_concat_manifest(frame_paths: list[Path], list_path: Path, duration: float | None = None) -> Path:
    """Write an FFmpeg concat demuxer list enumerating frames in order.

    Args:
        frame_paths: Frame paths in playback order
        list_path: Where to write the list
        duration: Optional display time of each frame in seconds

    Returns:
        Path to the created list file
    """
    list_path.parent.mkdir(parents=True, exist_ok=True)
    with list_path.open("w", encoding="utf-8") as f:
        for p in frame_paths:
            escaped = p.resolve().as_posix().replace("'", "'\\''")
            f.write(f"file '{escaped}'\n")
            if duration is not None:
                f.write(f"duration {duration:g}\n")
        if frame_paths and duration is not None:
            # The concat demuxer ignores the duration of the final entry unless it is repeated.
            f.write(f"file '{escaped}'\n")
    return list_path


def remove_quietly(*paths: Path) -> None:
    """Best-effort removal of temporary files."""
    for p in paths:
        with contextlib.suppress(OSError):
            p.unlink()
