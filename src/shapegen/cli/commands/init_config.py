# topmark:header:start
#
#   project      : ShapeGen
#   file         : init_config.py
#   file_relpath : src/shapegen/cli/commands/init_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen `init-config` command.

Prints the packaged default configuration (comments included) as a starting
point for a project's ``shapegen.toml``, or nested under ``[tool.shapegen]``
for ``pyproject.toml`` with ``--pyproject``.
"""

from __future__ import annotations

import click

from shapegen.cli.cmd_common import get_console
from shapegen.config.io import nest_toml_under_section
from shapegen.config.model import MutableConfig
from shapegen.constants import PYPROJECT_TOOL_SECTION


@click.command(
    name="init-config",
    help="Print a starter ShapeGen configuration file.",
)
@click.option(
    "--pyproject",
    is_flag=True,
    help="Nest the configuration under [tool.shapegen] for pyproject.toml.",
)
def init_config_command(*, pyproject: bool) -> None:
    """Print the default configuration to stdout."""
    console = get_console(click.get_current_context())
    text: str = MutableConfig.get_default_config_toml()
    if pyproject:
        text = nest_toml_under_section(text, PYPROJECT_TOOL_SECTION)
    console.print(text, nl=False)
