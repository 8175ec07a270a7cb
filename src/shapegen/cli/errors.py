# topmark:header:start
#
#   project      : ShapeGen
#   file         : errors.py
#   file_relpath : src/shapegen/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ShapeGen CLI.

Raise these in commands to exit with a standardized message and exit code.
They print through the project console when one is present in the Click
context, and fall back to Click's default error display otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from shapegen.cli.exit_codes import ExitCode


class ShapegenError(click.ClickException):
    """Base class for all ShapeGen CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain message; color is applied in `show`."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class ShapegenUsageError(ShapegenError):
    """Invalid combination of flags or arguments."""

    exit_code = ExitCode.USAGE_ERROR


class ShapegenConfigError(ShapegenError):
    """Missing, unreadable or malformed configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class ShapegenFileNotFoundError(ShapegenError):
    """The input document does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ShapegenInputError(ShapegenError):
    """The input document is not valid JSON."""

    exit_code = ExitCode.INPUT_ERROR


class ShapegenIOError(ShapegenError):
    """Reading the input or writing a generated module failed."""

    exit_code = ExitCode.IO_ERROR
