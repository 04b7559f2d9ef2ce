"""
Path and file system utilities for texanim.

This module handles all path-related functionality including:
- Filename parsing for frame sequences
- Sequence discovery and grouping by base name
- Listing single frames for per-file conversions
"""

from __future__ import annotations

import re
from pathlib import Path

from ..core.types import Frame, FrameGroup

# Greedy base: "room_12_3" splits as ("room_12", 3).
FRAME_STEM_RE = re.compile(r"^(?P<base>.+)_(?P<frame>\d+)$")


def parse_stem(stem: str) -> tuple[str, int] | None:
    """Parse a filename stem into a (base_name, frame_index).

    Examples:
        "door_001" -> ("door", 1)
        "room_12_3" -> ("room_12", 3)
        "door" -> None
        "_3" -> None

    Args:
        stem (str): Filename stem to parse.

    Returns:
        Optional[Tuple[str, int]]: (base, frame) if matched, else None.
    """
    match = FRAME_STEM_RE.match(stem)
    if not match:
        return None
    return match.group("base"), int(match.group("frame"))


def list_frames(directory: Path, ext: str = ".png") -> list[Path]:
    """Return all files in `directory` with extension `ext`, sorted by name."""
    ext = ext.lower()
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ext)


def group_by_base_name(directory: Path, ext: str = ".png", min_frames: int = 2) -> dict[str, FrameGroup]:
    """
    Scan one directory and group `<base>_<frame><ext>` files into sequences.

    Files with another extension or without a trailing `_<digits>` are skipped.
    Frames are sorted by numeric index; when two files share an index (e.g.
    "door_1.png" and "door_01.png") the one whose name sorts first is kept.
    Groups with fewer than `min_frames` frames are dropped.

    Args:
        directory: Directory to scan (not recursive)
        ext: Frame file extension, compared case-insensitively
        min_frames: Minimum number of frames for a group to be returned

    Returns:
        Mapping of base name to FrameGroup, ordered by base name
    """
    buckets: dict[str, dict[int, Frame]] = {}

    for f_path in list_frames(directory, ext):
        parsed = parse_stem(f_path.stem)
        if not parsed:
            continue
        base, index = parsed
        buckets.setdefault(base, {}).setdefault(index, Frame(name=f_path.name, index=index, path=f_path))

    groups: dict[str, FrameGroup] = {}
    for base in sorted(buckets):
        by_index = buckets[base]
        if len(by_index) < min_frames:
            continue
        frames = tuple(by_index[i] for i in sorted(by_index))
        groups[base] = FrameGroup(name=base, frames=frames)

    return groups
