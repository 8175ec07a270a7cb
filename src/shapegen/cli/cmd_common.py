# topmark:header:start
#
#   project      : ShapeGen
#   file         : cmd_common.py
#   file_relpath : src/shapegen/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Plumbing shared by the ShapeGen commands.

Reading the input document (file or STDIN), mapping read/parse failures to
CLI errors, and printing diagnostics. Policy such as exit codes stays in the
commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from shapegen.api import DocumentError, load_document
from shapegen.cli.errors import ShapegenFileNotFoundError, ShapegenInputError, ShapegenIOError
from shapegen.config.logging import get_logger
from shapegen.constants import STDIN_MARKER

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shapegen.cli.console import ClickConsole
    from shapegen.config.logging import ShapegenLogger
    from shapegen.config.model import Config
    from shapegen.diagnostic.model import Diagnostic
    from shapegen.schema.model import JsonValue

logger: ShapegenLogger = get_logger(__name__)


def get_effective_verbosity(ctx: click.Context, config: Config | None = None) -> int:
    """Return the program-output verbosity: the config value if set, else the group's."""
    cfg_level: int | None = config.verbosity_level if config is not None else None
    if cfg_level is not None:
        return int(cfg_level)
    return int((ctx.obj or {}).get("verbosity_level", 0))


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console stored on the context by the group callback."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def discovery_anchor(source: str) -> Path | None:
    """Return the input file path anchoring config discovery; None for STDIN."""
    return None if source == STDIN_MARKER else Path(source)


def read_document(source: str) -> JsonValue:
    """Read and parse the JSON document named on the command line.

    Args:
        source (str): A file path, or ``-`` for STDIN.

    Returns:
        JsonValue: The parsed document.

    Raises:
        ShapegenFileNotFoundError: If the file does not exist.
        ShapegenInputError: If the content is not valid JSON.
        ShapegenIOError: If the file cannot be read.
    """
    if source == STDIN_MARKER:
        text: str = click.get_text_stream("stdin").read()
        try:
            return load_document(text)
        except DocumentError as exc:
            raise ShapegenInputError(f"<stdin>: {exc}") from exc

    path = Path(source)
    if not path.exists():
        raise ShapegenFileNotFoundError(f"No such file: {path}")
    try:
        return load_document(path)
    except DocumentError as exc:
        if isinstance(exc.__cause__, json.JSONDecodeError):
            raise ShapegenInputError(str(exc)) from exc
        raise ShapegenIOError(str(exc)) from exc


def default_doc_path(source: str) -> str | None:
    """Return a documentation-like path (``/<stem>``) derived from the input file name."""
    if source == STDIN_MARKER:
        return None
    stem: str = Path(source).stem.replace("-", "_").replace(" ", "_").replace(".", "_")
    return f"/{stem}" if stem else None


def report_diagnostics(
    console: ClickConsole, diagnostics: Iterable[Diagnostic], *, verbosity: int
) -> None:
    """Print diagnostics to stderr unless quiet (``-q``) was requested."""
    if verbosity < 0:
        return
    console.diagnostics(diagnostics)
