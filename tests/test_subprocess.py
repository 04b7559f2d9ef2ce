import sys
from pathlib import Path

from texanim.utils.subprocess import format_cmd, remove_quietly, run_subprocess


def test_exit_code_and_stderr_are_returned():
    code, stderr = run_subprocess([sys.executable, "-c", "import sys; sys.stderr.write('bad frame'); sys.exit(3)"])

    assert code == 3
    assert "bad frame" in stderr


def test_timeout_kills_the_command():
    code, stderr = run_subprocess([sys.executable, "-c", "import time; time.sleep(5)"], timeout=1)

    assert code is None
    assert stderr == "Command timed out after 1 seconds"


def test_missing_executable_has_no_exit_code(tmp_path: Path):
    code, stderr = run_subprocess([str(tmp_path / "no-such-tool"), "-version"])

    assert code is None
    assert stderr


def test_remove_quietly_ignores_missing_files(tmp_path: Path):
    present = tmp_path / "list.txt"
    present.write_text("x")

    remove_quietly(present, tmp_path / "palette.png")

    assert not present.exists()


def test_format_cmd_quotes_spaces():
    assert format_cmd(["magick", "my frame.png"]) == "magick 'my frame.png'"
