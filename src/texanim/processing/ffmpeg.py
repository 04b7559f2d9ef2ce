"""
FFmpeg command building for texanim.

GIF output uses the two-pass palette technique: the first pass derives an
optimal palette from all frames, the second encodes the frames against it.
"""

from __future__ import annotations

from pathlib import Path

from ..config import AnimationSettings, TransparencySettings

QUIET_ARGS = ["-hide_banner", "-loglevel", "error", "-nostdin"]


class FFmpegCommandBuilder:
    """Builder class for constructing FFmpeg commands."""

    @staticmethod
    def _scale_chain(anim: AnimationSettings) -> str:
        return f"fps={anim.fps},scale={anim.scale_width}:-1:flags={anim.scale_flags}"

    @staticmethod
    def build_palette_cmd(
        ffmpeg: str,
        list_file: Path,
        palette_path: Path,
        anim: AnimationSettings,
    ) -> list[str]:
        """Create the palette generation pass over a concat list."""
        palettegen = "palettegen"
        if anim.preserve_alpha:
            palettegen += f"=reserve_transparent=on:transparency_color={anim.transparency_color}"
        return [
            ffmpeg,
            *QUIET_ARGS,
            "-f", "concat",
            "-safe", "0",
            "-i", str(list_file),
            "-vf", f"{FFmpegCommandBuilder._scale_chain(anim)},{palettegen}",
            "-y", str(palette_path),
        ]

    @staticmethod
    def build_paletteuse_cmd(
        ffmpeg: str,
        list_file: Path,
        palette_path: Path,
        out_path: Path,
        anim: AnimationSettings,
    ) -> list[str]:
        """Create the encode pass that maps frames onto the generated palette."""
        paletteuse = "paletteuse"
        if anim.preserve_alpha:
            paletteuse += f"=alpha_threshold={anim.alpha_threshold}"
        return [
            ffmpeg,
            *QUIET_ARGS,
            "-f", "concat",
            "-safe", "0",
            "-i", str(list_file),
            "-i", str(palette_path),
            "-lavfi", f"{FFmpegCommandBuilder._scale_chain(anim)}[x];[x][1:v]{paletteuse}",
            "-loop", str(anim.loop),
            "-y", str(out_path),
        ]

    @staticmethod
    def build_colorkey_cmd(
        ffmpeg: str,
        src: Path,
        dst: Path,
        settings: TransparencySettings,
    ) -> list[str]:
        """Create a command that keys the configured colour out of one image."""
        colorkey = f"colorkey={settings.colorkey_color}:{settings.similarity:g}:{settings.blend:g}"
        return [
            ffmpeg,
            *QUIET_ARGS,
            "-i", str(src),
            "-vf", colorkey,
            "-y", str(dst),
        ]
