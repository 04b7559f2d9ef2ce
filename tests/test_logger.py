import io
from pathlib import Path

from rich.console import Console

from texanim.output.logger import SimpleLogger


def make_logger(log_file: Path | None = None) -> tuple[SimpleLogger, io.StringIO, io.StringIO]:
    out, err = io.StringIO(), io.StringIO()
    logger = SimpleLogger(log_file, console=Console(file=out, width=200), err_console=Console(file=err, width=200))
    return logger, out, err


def test_levels_route_to_stdout_and_stderr():
    logger, out, err = make_logger()

    logger.info("scanning [textures]")
    logger.success("Created: door.gif")
    logger.error("Failed: wall")

    assert "[INFO] scanning [textures]" in out.getvalue()
    assert "[SUCCESS] Created: door.gif" in out.getvalue()
    assert "[ERROR] Failed: wall" in err.getvalue()
    assert "Failed: wall" not in out.getvalue()


def test_log_file_persistence(tmp_path: Path):
    log_file = tmp_path / "logs" / "run.log"
    logger, _, _ = make_logger(log_file)

    logger.info("First log entry")
    logger.table(["#", "Sequence"], [["01", "door"]], title="Found 1 texture sequences")
    logger.summary("Summary", [("gifs:", "1 created")])

    content = log_file.read_text(encoding="utf-8")
    assert "Session started:" in content
    assert "[INFO] First log entry" in content
    assert "01 | door" in content
    assert "1 created" in content


def test_empty_table_prints_nothing():
    logger, out, _ = make_logger()
    logger.table(["#"], [])
    assert out.getvalue() == ""


def test_logger_holds_only_its_outputs():
    logger, _, _ = make_logger()
    assert set(vars(logger)) == {"log_file", "console", "err_console"}
