# topmark:header:start
#
#   project      : ShapeGen
#   file         : console.py
#   file_relpath : src/shapegen/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console for user-facing program output.

Generated code and reports go to stdout; diagnostics and errors go to stderr.
Internal diagnostics use `logging` (see `shapegen.config.logging`). The group
callback stores one `ClickConsole` in ``ctx.obj["console"]``.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, TextIO

import click

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shapegen.diagnostic.model import Diagnostic


class ClickConsole:
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, emit ANSI styles; otherwise plain text.
        out (TextIO | None): Stream for standard output (defaults to `sys.stdout`).
        err (TextIO | None): Stream for diagnostics and errors (defaults to `sys.stderr`).
    """

    enable_color: bool
    out: TextIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr (bright red)."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style`, or unchanged when color is off."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)

    def diagnostics(self, items: Iterable[Diagnostic]) -> None:
        """Write diagnostics to stderr, one per line, colored by level."""
        for diag in items:
            line: str = f"{diag.level.value}: {diag.message}"
            click.echo(
                diag.level.color(line) if self.enable_color else line,
                file=self.err,
                color=self.enable_color,
            )
