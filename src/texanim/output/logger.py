"""
Console and file logging for texanim.

Console lines are rendered with Rich; the optional log file receives the same
lines as plain text.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table


class SimpleLogger:
    """Simple logger that writes to console and file."""

    def __init__(
        self,
        log_file: Path | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
    ):
        self.log_file = log_file
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(f"\n{'='*60}\n")
                f.write(f"Session started: {datetime.now().isoformat()}\n")
                f.write(f"{'='*60}\n")

    def log(self, message: str, prefix: str = "", error: bool = False, style: str | None = None) -> None:
        """Log a message to console and file.

        Args:
            message: The log message
            prefix: Optional prefix like [INFO], [ERROR], etc.
            error: Whether to write to stderr instead of stdout
            style: Optional Rich style for the console line
        """
        timestamp = datetime.now().strftime("%H:%M:%S")

        if prefix:
            formatted = f"[{timestamp}] {prefix} {message}"
        else:
            formatted = f"[{timestamp}] {message}"

        output = self.err_console if error else self.console
        output.print(escape(formatted), style=style)

        self._write_file(formatted)

    def _write_file(self, line: str) -> None:
        if not self.log_file:
            return
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError:
            pass  # Don't fail on logging errors

    def table(self, headers: list[str], rows: list[list[str]], title: str | None = None) -> None:
        """Print a table.

        Args:
            headers: Column headers
            rows: Table rows
            title: Optional table title
        """
        if not headers or not rows:
            return

        table = Table(title=title, show_header=True, header_style="bold magenta")
        for h in headers:
            table.add_column(h)
        for row in rows:
            table.add_row(*(escape(str(cell)) for cell in row))
        self.console.print(table)

        if title:
            self._write_file(title)
        self._write_file(" | ".join(headers))
        for row in rows:
            self._write_file(" | ".join(str(cell) for cell in row))

    def summary(self, title: str, rows: list[tuple[str, str]]) -> None:
        """Print label/value rows inside a panel."""
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(style="bold")
        table.add_column()
        for label, value in rows:
            table.add_row(escape(label), escape(value))
        self.console.print(Panel(table, title=f"[bold cyan]{escape(title)}[/bold cyan]", border_style="cyan", title_align="left"))

        self._write_file(title)
        for label, value in rows:
            self._write_file(f"{label:<20} {value}")

    def section(self, title: str) -> None:
        """Print a section header.

        Args:
            title: Section title
        """
        self.console.print()
        self.console.rule(escape(title))
        self._write_file("")
        self._write_file("=" * 60)
        self._write_file(title.center(60))
        self._write_file("=" * 60)

    def success(self, message: str) -> None:
        """Log a success message."""
        self.log(message, prefix="[SUCCESS]", style="green")

    def error(self, message: str) -> None:
        """Log an error message."""
        self.log(message, prefix="[ERROR]", error=True, style="bold red")

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.log(message, prefix="[WARNING]", style="yellow")

    def info(self, message: str) -> None:
        """Log an info message."""
        self.log(message, prefix="[INFO]")
