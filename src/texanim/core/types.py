"""
Core data types for texanim.

Frames and frame groups produced by the sequence grouper, the tool resolution
produced by tool discovery, and the Ok/Err result returned by every backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Union

from .errors import BackendError


@dataclass(frozen=True)
class Frame:
    """One still image of an animation sequence."""

    name: str
    index: int
    path: Path


@dataclass(frozen=True)
class FrameGroup:
    """Frames sharing a base name, sorted by frame index."""

    name: str
    frames: tuple[Frame, ...]

    def __post_init__(self) -> None:
        indices = [f.index for f in self.frames]
        if any(a >= b for a, b in zip(indices, indices[1:])):
            raise ValueError(f"Frames of {self.name!r} are not strictly increasing: {indices}")

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    @property
    def paths(self) -> list[Path]:
        return [f.path for f in self.frames]


class ToolKind(str, Enum):
    """How the usable backend was discovered."""

    MAGICK = "imagemagick"
    MAGICK_CONVERT = "imagemagick-convert"
    MAGICK_PATH = "imagemagick-path"
    FFMPEG = "ffmpeg"

    @property
    def label(self) -> str:
        if self is ToolKind.FFMPEG:
            return "FFmpeg"
        if self is ToolKind.MAGICK_CONVERT:
            return "ImageMagick (convert)"
        return "ImageMagick"


@dataclass(frozen=True)
class ToolResolution:
    """Result of tool probing, passed to every backend invocation.

    `magick` is None when only FFmpeg was found; the primary backend then
    fails immediately and the FFmpeg fallback does the work.
    """

    kind: ToolKind
    magick: str | None
    ffmpeg: str = "ffmpeg"


@dataclass(frozen=True)
class Ok:
    """Successful backend invocation."""

    path: Path


@dataclass(frozen=True)
class Err:
    """Failed backend invocation."""

    error: BackendError

    @property
    def reason(self) -> str:
        return str(self.error)


BackendResult = Union[Ok, Err]


@dataclass
class RunSummary:
    """Tally of one pipeline run."""

    succeeded: int = 0
    failed: int = 0
    outputs: list[Path] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed
