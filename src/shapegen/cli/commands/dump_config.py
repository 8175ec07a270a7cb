# topmark:header:start
#
#   project      : ShapeGen
#   file         : dump_config.py
#   file_relpath : src/shapegen/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen `dump-config` command.

Emits the effective configuration as TOML after merging the packaged
defaults, discovered and explicit config files, and CLI overrides. The TOML
is wrapped between ``# === BEGIN ===`` and ``# === END ===`` markers.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from shapegen.cli.cmd_common import get_console, get_effective_verbosity, report_diagnostics
from shapegen.cli.config_resolver import resolve_config_from_click
from shapegen.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_inference_options,
    common_output_options,
)
from shapegen.config.io import to_toml

if TYPE_CHECKING:
    from shapegen.config.model import Config

BEGIN_MARKER = "# === BEGIN ==="
END_MARKER = "# === END ==="


@click.command(
    name="dump-config",
    help="Dump the merged ShapeGen configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@click.option(
    "--anchor",
    type=click.Path(path_type=Path),
    default=None,
    help="Start config discovery here instead of the current directory.",
)
@common_config_options
@common_inference_options
@common_output_options
def dump_config_command(
    *,
    anchor: Path | None,
    no_config: bool,
    config_paths: tuple[str, ...],
    root_name: str | None,
    no_root: bool,
    scalar_sequences: bool | None,
    sample_comments: bool | None,
    namespace: str | None,
    output_dir: str | None,
) -> None:
    """Print the effective configuration between BEGIN/END markers."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    config: Config = resolve_config_from_click(
        anchor=anchor,
        no_config=no_config,
        config_paths=config_paths,
        root_name=root_name,
        no_root=no_root,
        scalar_sequences=scalar_sequences,
        sample_comments=sample_comments,
        namespace=namespace,
        output_dir=output_dir,
    ).freeze()
    vlevel: int = get_effective_verbosity(ctx, config)
    report_diagnostics(console, config.diagnostics, verbosity=vlevel)

    if vlevel > 0:
        sources: str = ", ".join(str(p) for p in config.config_files)
        console.print(console.styled(f"# Sources: {sources}", dim=True))
    console.print(BEGIN_MARKER)
    console.print(to_toml(config.to_toml_dict()), nl=False)
    console.print(END_MARKER)
