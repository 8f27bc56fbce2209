"""User-facing error and not-found messages."""

from __future__ import annotations

import sys
from typing import TextIO

from pygments.console import colorize

from .display import DisplayConfig
from .errors import format_error_chain
from .repository.types import VersionId

ERROR_COLOR = "red"


def format_error_line(exc: BaseException, color: bool = False) -> str:
    """Return ``Error: <message>: <cause>...``, red when ``color`` is set."""
    line = f"Error: {format_error_chain(exc)}"
    if color:
        return colorize(ERROR_COLOR, line)
    return line


def format_not_found(object_id: str, version: VersionId | None = None) -> str:
    if version is not None:
        return f"Object {object_id} version {version} was not found"
    return f"Object {object_id} was not found"


class ErrorReporter:
    """Writes errors to the error stream and not-found notices to stdout.

    Streams default to the current ``sys.stderr``/``sys.stdout`` at write time.
    Quiet mode drops error text only; not-found notices are still printed.
    """

    def __init__(
        self,
        display: DisplayConfig | None = None,
        err: TextIO | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.display = display or DisplayConfig()
        self._err = err
        self._out = out

    def error(self, exc: BaseException) -> None:
        if self.display.quiet:
            return
        stream = self._err or sys.stderr
        stream.write(format_error_line(exc, color=self.display.color) + "\n")
        stream.flush()

    def not_found(self, object_id: str, version: VersionId | None = None) -> None:
        stream = self._out or sys.stdout
        stream.write(format_not_found(object_id, version) + "\n")


__all__ = ["ErrorReporter", "format_error_line", "format_not_found"]
