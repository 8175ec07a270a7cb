# topmark:header:start
#
#   project      : ShapeGen
#   file         : generate.py
#   file_relpath : src/shapegen/cli/commands/generate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen `generate` command.

Renders one JSON document as a complete Haskell module and places it below
the output directory (``<output-dir>/<Module/Path>.hs``).

Modes:
  * default (dry run): report whether the module would be written; exit 2
    when the target would be created or changed, 0 when it is up to date.
  * ``--apply``: write the module (atomically).
  * ``--stdout``: print the module instead of writing it.

The module name comes from ``--module``, ``--doc-url`` or ``--doc-path``
(mutually exclusive), otherwise from the input file name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shapegen import api
from shapegen.cli.cmd_common import (
    default_doc_path,
    discovery_anchor,
    get_console,
    get_effective_verbosity,
    read_document,
    report_diagnostics,
)
from shapegen.cli.config_resolver import resolve_config_from_click
from shapegen.cli.errors import ShapegenIOError, ShapegenUsageError
from shapegen.cli.exit_codes import ExitCode
from shapegen.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_inference_options,
    common_output_options,
)
from shapegen.config.logging import get_logger
from shapegen.output.model import WriteStatus, unified_diff
from shapegen.output.writer import select_sink, write_module
from shapegen.utils.diff import render_patch

if TYPE_CHECKING:
    from shapegen.config.logging import ShapegenLogger
    from shapegen.config.model import Config
    from shapegen.output.model import GeneratedModule, WriteResult
    from shapegen.output.writer import WriteSink

logger: ShapegenLogger = get_logger(__name__)


@click.command(
    name="generate",
    help="Generate a Haskell module from a JSON document (use '-' to read STDIN).",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("source", metavar="JSON_FILE", type=str)
@click.option("--module", "module_name", default=None, help="Explicit module name.")
@click.option("--doc-url", default=None, help="Derive the module name from a documentation URL.")
@click.option(
    "--doc-path", default=None, help="Derive the module name from a documentation path."
)
@click.option("--apply", "apply_changes", is_flag=True, help="Write the generated module.")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the module instead of writing.")
@click.option("--diff", "show_diff", is_flag=True, help="Show a unified diff against the target.")
@common_config_options
@common_inference_options
@common_output_options
def generate_command(
    *,
    source: str,
    module_name: str | None,
    doc_url: str | None,
    doc_path: str | None,
    apply_changes: bool,
    to_stdout: bool,
    show_diff: bool,
    no_config: bool,
    config_paths: tuple[str, ...],
    root_name: str | None,
    no_root: bool,
    scalar_sequences: bool | None,
    sample_comments: bool | None,
    namespace: str | None,
    output_dir: str | None,
) -> None:
    """Generate the module for ``source`` and hand it to the selected sink."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    naming_options: list[str] = [
        flag
        for flag, value in (
            ("--module", module_name),
            ("--doc-url", doc_url),
            ("--doc-path", doc_path),
        )
        if value
    ]
    if len(naming_options) > 1:
        raise ShapegenUsageError(f"Options {' and '.join(naming_options)} are mutually exclusive.")
    if to_stdout and apply_changes:
        raise ShapegenUsageError("Options --stdout and --apply are mutually exclusive.")

    config: Config = resolve_config_from_click(
        anchor=discovery_anchor(source),
        no_config=no_config,
        config_paths=config_paths,
        apply_changes=apply_changes or None,
        root_name=root_name,
        no_root=no_root,
        scalar_sequences=scalar_sequences,
        sample_comments=sample_comments,
        namespace=namespace,
        output_dir=output_dir,
    ).freeze()
    vlevel: int = get_effective_verbosity(ctx, config)
    report_diagnostics(console, config.diagnostics, verbosity=vlevel)

    document = read_document(source)
    name: str = api.module_name_for(
        config,
        explicit=module_name,
        url=doc_url,
        path=doc_path or (None if module_name or doc_url else default_doc_path(source)),
    )
    schema = api.infer(document, config)
    module: GeneratedModule = api.build_module(schema, name, config)
    report_diagnostics(console, schema.diagnostics, verbosity=vlevel)

    sink: WriteSink = select_sink(config, to_stdout=to_stdout)
    try:
        if show_diff and not to_stdout:
            patch: str = unified_diff(module)
            if patch:
                console.print(render_patch(patch) if console.enable_color else patch, nl=False)
        result: WriteResult = write_module(module, sink)
    except UnicodeDecodeError as exc:
        raise ShapegenIOError(f"Cannot read existing {module.path} as UTF-8: {exc}") from exc
    except OSError as exc:
        raise ShapegenIOError(f"Cannot write {module.path}: {exc}") from exc

    if to_stdout:
        return

    if vlevel >= 0:
        line: str = f"{module.path}: {result.status.value} ({module.module_name})"
        console.print(result.status.color(line) if console.enable_color else line)
    if result.status == WriteStatus.WOULD_WRITE:
        if vlevel > 0:
            console.print("Run again with --apply to write the module.")
        ctx.exit(ExitCode.WOULD_CHANGE)
