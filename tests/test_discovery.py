from pathlib import Path

import pytest

from texanim.config import AppConfig, ToolSettings
from texanim.core.types import ToolKind
from texanim.tools import check
from texanim.tools.check import check_tools, discover_tools


class FakeVersions:
    """Answers `-version` checks; commands in `available` succeed."""

    def __init__(self, *available: str):
        self.available = set(available)
        self.asked: list[str] = []

    def __call__(self, cmd, *, timeout=None):
        assert cmd[1:] == ["-version"]
        self.asked.append(cmd[0])
        if cmd[0] in self.available:
            return 0, ""
        return None, f"[Errno 2] No such file or directory: '{cmd[0]}'"


@pytest.fixture
def settings(tmp_path: Path) -> ToolSettings:
    return ToolSettings(search_paths=[tmp_path / "missing" / "magick.exe"])


def test_magick_on_path_wins(monkeypatch, settings):
    versions = FakeVersions("magick", "ffmpeg")
    monkeypatch.setattr(check, "run_subprocess", versions)

    resolution = discover_tools(settings)

    assert resolution.kind is ToolKind.MAGICK
    assert resolution.magick == "magick"
    assert versions.asked == ["magick"]


def test_legacy_convert_is_second(monkeypatch, settings):
    monkeypatch.setattr(check, "run_subprocess", FakeVersions("convert"))

    resolution = discover_tools(settings)

    assert resolution.kind is ToolKind.MAGICK_CONVERT
    assert resolution.magick == "convert"


def test_magick_path_used_when_file_exists(monkeypatch, settings, tmp_path):
    exe = tmp_path / "magick.exe"
    exe.write_bytes(b"")
    monkeypatch.setattr(check, "run_subprocess", FakeVersions("ffmpeg"))

    resolution = discover_tools(settings.model_copy(update={"magick_path": exe}))

    assert resolution.kind is ToolKind.MAGICK_PATH
    assert resolution.magick == str(exe)


def test_nonexistent_magick_path_falls_through_to_search_paths(monkeypatch, tmp_path):
    installed = tmp_path / "ImageMagick" / "magick.exe"
    installed.parent.mkdir()
    installed.write_bytes(b"")
    settings = ToolSettings(
        magick_path=tmp_path / "nope.exe",
        search_paths=[tmp_path / "absent.exe", installed],
    )
    monkeypatch.setattr(check, "run_subprocess", FakeVersions())

    resolution = discover_tools(settings)

    assert resolution.kind is ToolKind.MAGICK_PATH
    assert resolution.magick == str(installed)


def test_ffmpeg_is_last_resort(monkeypatch, settings):
    versions = FakeVersions("ffmpeg")
    monkeypatch.setattr(check, "run_subprocess", versions)

    resolution = discover_tools(settings)

    assert resolution.kind is ToolKind.FFMPEG
    assert resolution.magick is None
    assert resolution.ffmpeg == "ffmpeg"
    assert versions.asked == ["magick", "convert", "ffmpeg"]


def test_nothing_found(monkeypatch, settings):
    monkeypatch.setattr(check, "run_subprocess", FakeVersions())
    assert discover_tools(settings) is None


def test_empty_magick_path_env_leaves_ffmpeg(monkeypatch, tmp_path):
    monkeypatch.setenv("MAGICK_PATH", "")
    monkeypatch.setattr(check, "run_subprocess", FakeVersions("ffmpeg"))
    tools = AppConfig().resolved_tools()

    resolution = discover_tools(tools.model_copy(update={"search_paths": [tmp_path / "absent.exe"]}))

    assert resolution.kind is ToolKind.FFMPEG


def test_directory_as_magick_path_is_skipped(monkeypatch, settings, tmp_path):
    monkeypatch.setattr(check, "run_subprocess", FakeVersions("ffmpeg"))

    resolution = discover_tools(settings.model_copy(update={"magick_path": tmp_path}))

    assert resolution.kind is ToolKind.FFMPEG


def test_check_tools_all_present(monkeypatch, settings):
    monkeypatch.setattr(check, "run_subprocess", FakeVersions("magick", "ffmpeg"))

    assert check_tools(settings) == (True, [])


def test_check_tools_reports_missing_ffmpeg(monkeypatch, settings):
    monkeypatch.setattr(check, "run_subprocess", FakeVersions("magick"))

    ok, problems = check_tools(settings)

    assert ok
    assert problems == ["ffmpeg not found in PATH"]


def test_check_tools_ffmpeg_only(monkeypatch, settings):
    monkeypatch.setattr(check, "run_subprocess", FakeVersions("ffmpeg"))

    ok, problems = check_tools(settings)

    assert ok
    assert len(problems) == 1
    assert problems[0].startswith("ImageMagick not found")


def test_check_tools_nothing(monkeypatch, settings):
    monkeypatch.setattr(check, "run_subprocess", FakeVersions())

    ok, problems = check_tools(settings)

    assert not ok
    assert len(problems) == 2
