"""Diagnostic output to stderr.

Traffic logs, cache notes, and warnings never touch stdout: the payloads a
caller fetches are theirs to print. All diagnostics go through a Rich
:class:`~rich.console.Console` bound to stderr, with plain ``print``
fallback when colour is disabled (``NO_COLOR`` set, ``TERM=dumb``, or
``no_color=True``).

The module exposes two layers:

1. :class:`DiagnosticOutput` -- holds the console and the quiet/verbose
   flags.
2. Module-level helpers (:func:`info`, :func:`error`, :func:`debug`, ...)
   that delegate to a global instance managed with :func:`get_output`,
   :func:`set_output`, and :func:`reset_output`.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape


class DiagnosticOutput:
    """Routes diagnostic messages to stderr.

    Args:
        no_color: Disable colour and Rich markup.
        quiet: Suppress ``info`` messages. Warnings and errors still print.
        verbose: Show ``debug`` messages.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def is_quiet(self) -> bool:
        """Whether quiet mode is enabled."""
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        """Whether verbose mode is enabled."""
        return self._verbose

    def info(self, message: str) -> None:
        """Print an informational message. Suppressed when quiet."""
        if not self._quiet:
            self._emit(message, "{}")

    def warning(self, message: str) -> None:
        """Print a yellow warning. Never suppressed."""
        if self._no_color:
            print(f"Warning: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Print a bold-red error. Never suppressed."""
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a dimmed debug message. Only shown when verbose."""
        if self._verbose:
            self._emit(f"[debug] {message}", "[dim]{}[/dim]")

    def _emit(self, message: str, markup: str) -> None:
        if self._no_color:
            print(message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup.format(escape(message)))


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    return os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global output instance
# ------------------------------------------------------------------ #

_output: Optional[DiagnosticOutput] = None


def get_output() -> DiagnosticOutput:
    """Return the global :class:`DiagnosticOutput`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = DiagnosticOutput()
    return _output


def set_output(output: DiagnosticOutput) -> None:
    """Install *output* as the global :class:`DiagnosticOutput`."""
    global _output
    _output = output


def reset_output() -> None:
    """Drop the global instance so the next :func:`get_output` builds a fresh one."""
    global _output
    _output = None


def info(message: str) -> None:
    """Print info message to stderr via the global DiagnosticOutput."""
    get_output().info(message)


def warning(message: str) -> None:
    """Print warning to stderr via the global DiagnosticOutput."""
    get_output().warning(message)


def error(message: str) -> None:
    """Print error to stderr via the global DiagnosticOutput."""
    get_output().error(message)


def debug(message: str) -> None:
    """Print debug message to stderr via the global DiagnosticOutput."""
    get_output().debug(message)
