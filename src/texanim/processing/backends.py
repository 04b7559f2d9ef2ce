"""
Backend invokers for texanim.

Each backend turns one work item (a name and its ordered frame files) into
exactly one output file in the output directory. Failures never raise out of
`invoke`; they come back as `Err` carrying the tool's diagnostic text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ..config import AnimationSettings, TransparencySettings
from ..core.errors import BackendError
from ..core.types import BackendResult, Err, Ok, ToolResolution
from ..output.logger import SimpleLogger
from ..utils.subprocess import format_cmd, remove_quietly, run_subprocess, write_concat_manifest
from .ffmpeg import FFmpegCommandBuilder
from .magick import MagickCommandBuilder


class Backend(ABC):
    """Common invocation plumbing: run one command, map failure to BackendError."""

    label = "backend"

    def __init__(
        self,
        resolution: ToolResolution,
        timeout_sec: int | None = None,
        logger: SimpleLogger | None = None,
        verbose: bool = False,
    ) -> None:
        self.resolution = resolution
        self.timeout_sec = timeout_sec
        self.logger = logger
        self.verbose = verbose

    @abstractmethod
    def output_path(self, name: str, frames: list[Path], output_dir: Path) -> Path:
        """Where the item's single output file goes."""

    def invoke(self, name: str, frames: list[Path], output_dir: Path) -> BackendResult:
        """Convert one item, returning Ok(output_path) or Err(BackendError)."""
        try:
            return Ok(self._run(name, frames, output_dir))
        except BackendError as e:
            return Err(e)

    @abstractmethod
    def _run(self, name: str, frames: list[Path], output_dir: Path) -> Path:
        """Produce the output file or raise BackendError."""

    def _exec(self, cmd: list[str]) -> None:
        if self.verbose and self.logger is not None:
            self.logger.log(f"Running: {format_cmd(cmd)}", style="dim")
        code, stderr = run_subprocess(cmd, timeout=self.timeout_sec)
        if code != 0:
            raise BackendError(cmd[0], stderr, code)


class MagickBackend(Backend):
    """Backends driven by the ImageMagick executable found by tool discovery."""

    label = "ImageMagick"

    @property
    def magick(self) -> str:
        if self.resolution.magick is None:
            raise BackendError("magick", "ImageMagick is not available")
        return self.resolution.magick


class FFmpegBackend(Backend):
    """Backends driven by FFmpeg."""

    label = "FFmpeg"

    @property
    def ffmpeg(self) -> str:
        return self.resolution.ffmpeg


class AnimatedGifMixin:
    def output_path(self, name: str, frames: list[Path], output_dir: Path) -> Path:
        return output_dir / f"{name}.gif"


class SingleImageMixin:
    def output_path(self, name: str, frames: list[Path], output_dir: Path) -> Path:
        return output_dir / frames[0].name


# ------------------------------
# Animated GIFs
# ------------------------------


class MagickAnimateBackend(AnimatedGifMixin, MagickBackend):
    """One `magick` call with every frame and the animation flags."""

    def __init__(self, resolution: ToolResolution, anim: AnimationSettings, **kwargs) -> None:
        super().__init__(resolution, **kwargs)
        self.anim = anim

    def _run(self, name: str, frames: list[Path], output_dir: Path) -> Path:
        out_path = self.output_path(name, frames, output_dir)
        self._exec(MagickCommandBuilder.build_animate_cmd(self.magick, frames, out_path, self.anim))
        return out_path


class FFmpegAnimateBackend(AnimatedGifMixin, FFmpegBackend):
    """Concat list -> palette pass -> paletted encode pass.

    The list and palette are written next to the output as `<name>_list.txt`
    and `<name>_palette.png` and removed afterwards whatever the outcome.
    """

    def __init__(self, resolution: ToolResolution, anim: AnimationSettings, **kwargs) -> None:
        super().__init__(resolution, **kwargs)
        self.anim = anim

    def _run(self, name: str, frames: list[Path], output_dir: Path) -> Path:
        out_path = self.output_path(name, frames, output_dir)
        list_file = output_dir / f"{name}_list.txt"
        palette = output_dir / f"{name}_palette.png"
        try:
            write_concat_manifest(frames, list_file, duration=1 / self.anim.fps)
            self._exec(FFmpegCommandBuilder.build_palette_cmd(self.ffmpeg, list_file, palette, self.anim))
            self._exec(FFmpegCommandBuilder.build_paletteuse_cmd(self.ffmpeg, list_file, palette, out_path, self.anim))
        except OSError as e:
            raise BackendError(self.ffmpeg, f"cannot write {list_file}: {e}") from e
        finally:
            remove_quietly(list_file, palette)
        return out_path


# ------------------------------
# Transparency
# ------------------------------


class MagickTransparencyBackend(SingleImageMixin, MagickBackend):
    """`magick in -fuzz N% -transparent black out`."""

    def __init__(self, resolution: ToolResolution, settings: TransparencySettings, **kwargs) -> None:
        super().__init__(resolution, **kwargs)
        self.settings = settings

    def _run(self, name: str, frames: list[Path], output_dir: Path) -> Path:
        out_path = self.output_path(name, frames, output_dir)
        self._exec(MagickCommandBuilder.build_transparency_cmd(self.magick, frames[0], out_path, self.settings))
        return out_path


class FFmpegTransparencyBackend(SingleImageMixin, FFmpegBackend):
    """`ffmpeg -i in -vf colorkey=... out`."""

    def __init__(self, resolution: ToolResolution, settings: TransparencySettings, **kwargs) -> None:
        super().__init__(resolution, **kwargs)
        self.settings = settings

    def _run(self, name: str, frames: list[Path], output_dir: Path) -> Path:
        out_path = self.output_path(name, frames, output_dir)
        self._exec(FFmpegCommandBuilder.build_colorkey_cmd(self.ffmpeg, frames[0], out_path, self.settings))
        return out_path
