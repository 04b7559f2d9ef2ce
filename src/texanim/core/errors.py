"""Exception types shared by the conversion pipelines."""

from __future__ import annotations


class TexanimError(Exception):
    """Base class for texanim errors."""


class FatalSetupError(TexanimError):
    """The run cannot start: input directory missing or no usable tool."""


class BackendError(TexanimError):
    """One external tool invocation failed.

    Args:
        tool: Executable that was run
        diagnostic: Error text reported by the tool (stderr) or the OS
        returncode: Exit status, or None when the process never started or timed out
    """

    def __init__(self, tool: str, diagnostic: str, returncode: int | None = None) -> None:
        self.tool = tool
        self.diagnostic = diagnostic.strip()
        self.returncode = returncode
        super().__init__(self._format())

    def _format(self) -> str:
        status = "no exit code" if self.returncode is None else f"exit {self.returncode}"
        if self.diagnostic:
            return f"{self.tool} failed ({status}): {self.diagnostic}"
        return f"{self.tool} failed ({status})"
