"""Runs the real FFmpeg fallback when ffmpeg is installed."""

import shutil
from pathlib import Path

import cv2
import numpy as np
import pytest
from PIL import Image

from texanim.config import AppConfig
from texanim.core.types import Ok, ToolKind, ToolResolution
from texanim.processing.backends import FFmpegAnimateBackend, FFmpegTransparencyBackend

pytestmark = pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")

RESOLUTION = ToolResolution(ToolKind.FFMPEG, None, "ffmpeg")


def write_frames(directory: Path, base: str, count: int) -> list[Path]:
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for i in range(count):
        img = np.zeros((32, 32, 3), dtype=np.uint8)
        img[:, : (i + 1) * 8] = (0, 0, 255)
        p = directory / f"{base}_{i}.png"
        assert cv2.imwrite(str(p), img), f"failed to write {p}"
        paths.append(p)
    return paths


def test_palette_pipeline_produces_animated_gif(tmp_path: Path):
    frames = write_frames(tmp_path / "textures", "door", 3)
    out_dir = tmp_path / "gifs"
    out_dir.mkdir()

    result = FFmpegAnimateBackend(RESOLUTION, AppConfig().gif, timeout_sec=60).invoke("door", frames, out_dir)

    assert result == Ok(out_dir / "door.gif")
    with Image.open(result.path) as im:
        assert im.format == "GIF"
        assert getattr(im, "n_frames", 1) >= 2
    assert sorted(p.name for p in out_dir.iterdir()) == ["door.gif"]


def test_colorkey_makes_black_transparent(tmp_path: Path):
    frames = write_frames(tmp_path / "textures", "wall", 1)
    out_dir = tmp_path / "transparent"
    out_dir.mkdir()

    result = FFmpegTransparencyBackend(RESOLUTION, AppConfig().transparency, timeout_sec=60).invoke(
        "wall_0", frames, out_dir
    )

    assert isinstance(result, Ok)
    with Image.open(result.path) as im:
        rgba = im.convert("RGBA")
        assert rgba.getpixel((31, 0))[3] == 0
        assert rgba.getpixel((0, 0))[3] == 255
