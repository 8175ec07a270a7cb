# topmark:header:start
#
#   project      : ShapeGen
#   file         : options.py
#   file_relpath : src/shapegen/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reusable Click options and their resolution logic.

Commands and the group stay thin: verbosity, color, configuration sources,
inference switches and output settings are declared once here.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from shapegen.cli.cli_types import EnumChoiceParam
from shapegen.cli.errors import ShapegenUsageError
from shapegen.config.logging import get_logger
from shapegen.rendering.formats import OutputFormat

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)

#: Click context settings shared by the group and the subcommands.
CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Return the program-output verbosity: ``+n`` for ``-v`` x n, ``-n`` for ``-q`` x n.

    Raises:
        ShapegenUsageError: If both ``-v`` and ``-q`` are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ShapegenUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return verbose_count - quiet_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase program output (banners, per-module status).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Reduce program output (suppress diagnostics on stderr).",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: str | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Precedence: machine formats (never colored), then ``--color``, then
    ``FORCE_COLOR`` / ``NO_COLOR``, then whether stdout is a TTY.
    """
    if output_format and output_format.lower() == OutputFormat.JSON.value:
        return False
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (OSError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color auto|always|never`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config`` (repeatable) and ``--no-config``."""
    f = click.option(
        "--config",
        "-c",
        "config_paths",
        multiple=True,
        type=click.Path(dir_okay=False, path_type=str),
        help="Merge this TOML config file (shapegen.toml or pyproject.toml); repeatable.",
    )(f)
    f = click.option(
        "--no-config",
        is_flag=True,
        help="Do not discover shapegen.toml / pyproject.toml next to the input.",
    )(f)
    return f


def common_inference_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the options steering inference and type rendering."""
    f = click.option(
        "--root-name",
        default=None,
        help="Name of the record declared for the top-level document.",
    )(f)
    f = click.option(
        "--no-root",
        is_flag=True,
        help="Do not declare the top-level document; declare only its members.",
    )(f)
    f = click.option(
        "--scalar-sequences/--strict-sequences",
        "scalar_sequences",
        default=None,
        help="Let arrays of scalars resolve to a list of the scalar type.",
    )(f)
    f = click.option(
        "--sample-comments/--no-sample-comments",
        "sample_comments",
        default=None,
        help="Annotate text fields with the sample string.",
    )(f)
    return f


def common_output_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--namespace`` and ``--output-dir``."""
    f = click.option(
        "--namespace",
        default=None,
        help="Module namespace prefix (e.g. 'Data.FreeAgent'; empty for none).",
    )(f)
    f = click.option(
        "--output-dir",
        "-o",
        default=None,
        type=click.Path(file_okay=False, path_type=str),
        help="Directory receiving generated module trees.",
    )(f)
    return f


def format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--format default|json|markdown``."""
    return click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
