# topmark:header:start
#
#   project      : ShapeGen
#   file         : version.py
#   file_relpath : src/shapegen/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen `version` command."""

from __future__ import annotations

import json

import click

from shapegen.cli.cmd_common import get_console, get_effective_verbosity
from shapegen.cli.options import format_option
from shapegen.constants import SHAPEGEN_VERSION
from shapegen.rendering.formats import OutputFormat


@click.command(
    name="version",
    help="Show the installed ShapeGen version.",
)
@format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Print the ShapeGen version as installed in the current environment."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        console.print(json.dumps({"version": SHAPEGEN_VERSION}))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# ShapeGen Version\n")
        console.print(f"**ShapeGen version: {SHAPEGEN_VERSION}**")
    elif vlevel > 0:
        console.print(console.styled("ShapeGen version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(SHAPEGEN_VERSION, bold=True)}")
    else:
        console.print(console.styled(SHAPEGEN_VERSION, bold=True))
