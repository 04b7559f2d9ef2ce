"""
ImageMagick command building for texanim.

Commands are returned as argument vectors; frame paths are never interpolated
into a shell string.
"""

from __future__ import annotations

from pathlib import Path

from ..config import AnimationSettings, TransparencySettings


class MagickCommandBuilder:
    """Builder class for constructing ImageMagick commands."""

    @staticmethod
    def build_animate_cmd(
        magick: str,
        frame_paths: list[Path],
        out_path: Path,
        anim: AnimationSettings,
    ) -> list[str]:
        """Create a command that assembles frames into one animated GIF.

        Timing options must precede the frames they apply to; coalescing and
        layer optimization operate on the whole list and therefore follow it.
        """
        cmd = [
            magick,
            "-delay", str(anim.delay),
            "-loop", str(anim.loop),
            "-dispose", anim.dispose,
        ]
        cmd += [str(p) for p in frame_paths]
        if anim.optimize:
            cmd += ["-coalesce", "-layers", "optimize"]
        cmd.append(str(out_path))
        return cmd

    @staticmethod
    def build_transparency_cmd(
        magick: str,
        src: Path,
        dst: Path,
        settings: TransparencySettings,
    ) -> list[str]:
        """Create a command that turns pixels near the key colour transparent."""
        return [
            magick,
            str(src),
            "-fuzz", f"{settings.fuzz_percent:g}%",
            "-transparent", settings.key_color,
            str(dst),
        ]
