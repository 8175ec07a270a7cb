# topmark:header:start
#
#   project      : ShapeGen
#   file         : infer.py
#   file_relpath : src/shapegen/cli/commands/infer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen `infer` command.

Infers declarations from one JSON document and prints them: Haskell source
by default, a JSON description with ``--format json``, or a Markdown report
with ``--format markdown``. Diagnostics go to stderr (human formats) or into
the payload (JSON).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from shapegen import api
from shapegen.cli.cmd_common import (
    discovery_anchor,
    get_console,
    get_effective_verbosity,
    read_document,
    report_diagnostics,
)
from shapegen.cli.config_resolver import resolve_config_from_click
from shapegen.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_inference_options,
    format_option,
)
from shapegen.config.logging import get_logger
from shapegen.rendering.formats import OutputFormat
from shapegen.rendering.machine import schema_to_markdown, schema_to_payload

if TYPE_CHECKING:
    from shapegen.config.logging import ShapegenLogger
    from shapegen.config.model import Config
    from shapegen.rendering.haskell import RenderedDeclaration
    from shapegen.schema.finalizer import FinalizedSchema

logger: ShapegenLogger = get_logger(__name__)


def format_declarations(rendered: list[RenderedDeclaration]) -> str:
    """Join type texts, then decoder texts, separated by blank lines."""
    blocks: list[str] = [r.type_text for r in rendered]
    blocks.extend(r.decoder_text for r in rendered if r.decoder_text is not None)
    return "\n".join(blocks)


@click.command(
    name="infer",
    help="Infer declarations from a JSON document (use '-' to read STDIN).",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("source", metavar="JSON_FILE", type=str)
@common_config_options
@common_inference_options
@format_option
def infer_command(
    *,
    source: str,
    no_config: bool,
    config_paths: tuple[str, ...],
    root_name: str | None,
    no_root: bool,
    scalar_sequences: bool | None,
    sample_comments: bool | None,
    output_format: OutputFormat | None,
) -> None:
    """Print the declarations inferred from ``source``."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    config: Config = resolve_config_from_click(
        anchor=discovery_anchor(source),
        no_config=no_config,
        config_paths=config_paths,
        root_name=root_name,
        no_root=no_root,
        scalar_sequences=scalar_sequences,
        sample_comments=sample_comments,
    ).freeze()
    vlevel: int = get_effective_verbosity(ctx, config)
    report_diagnostics(console, config.diagnostics, verbosity=vlevel)

    document = read_document(source)
    schema: FinalizedSchema = api.infer(document, config)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    logger.debug("infer: %d declaration(s), format=%s", len(schema.declarations), fmt.value)

    if fmt == OutputFormat.JSON:
        console.print(json.dumps(schema_to_payload(schema), indent=2))
        return

    if fmt == OutputFormat.MARKDOWN:
        console.print(schema_to_markdown(schema, config.type_names), nl=False)
    else:
        if vlevel > 0:
            console.print(console.styled(f"-- inferred from {source}", dim=True))
        console.print(format_declarations(api.render_declarations(schema, config)), nl=False)
    report_diagnostics(console, schema.diagnostics, verbosity=vlevel)
