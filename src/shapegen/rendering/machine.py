# topmark:header:start
#
#   project      : ShapeGen
#   file         : machine.py
#   file_relpath : src/shapegen/rendering/machine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine-readable and Markdown views of a finalized schema.

The JSON payload is a plain ``dict`` so callers can serialize it however they
like; the CLI uses ``json.dumps(..., indent=2)``. Field types are described in
a language-neutral notation (``Text``, ``Number``, ``[Owner]``, ``Unknown``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shapegen.rendering.haskell import render
from shapegen.schema.model import RecordDecl, describe_field_type

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shapegen.config.types import TypeNames
    from shapegen.schema.finalizer import FinalizedSchema


def schema_to_payload(schema: FinalizedSchema) -> dict[str, Any]:
    """Return a JSON-friendly description of the schema and its diagnostics."""
    declarations: list[dict[str, Any]] = []
    for decl in schema.declarations:
        if isinstance(decl, RecordDecl):
            declarations.append(
                {
                    "kind": "record",
                    "name": decl.name,
                    "fields": [
                        {"name": name, "type": describe_field_type(field_type)}
                        for name, field_type in decl.fields
                    ],
                }
            )
        else:
            declarations.append(
                {
                    "kind": "alias",
                    "name": decl.name,
                    "type": describe_field_type(decl.element),
                }
            )
    return {
        "declarations": declarations,
        "record_names": schema.record_names,
        "diagnostics": [d.to_dict() for d in schema.diagnostics],
        "diagnostic_counts": schema.diagnostics.to_dict(),
    }


def render_markdown_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render a GitHub-flavoured Markdown table with padded, left-aligned columns."""
    widths: list[int] = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def _line(cells: Sequence[str]) -> str:
        return "| " + " | ".join(c.ljust(widths[i]) for i, c in enumerate(cells)) + " |"

    lines: list[str] = [_line(headers), _line(["-" * w for w in widths])]
    lines.extend(_line(row) for row in rows)
    return "\n".join(lines) + "\n"


def schema_to_markdown(schema: FinalizedSchema, names: TypeNames | None = None) -> str:
    """Render a Markdown report: a declaration table, then the generated code."""
    rows: list[list[str]] = []
    for decl in schema.declarations:
        if isinstance(decl, RecordDecl):
            rows.append(["record", decl.name, ", ".join(decl.field_names)])
        else:
            rows.append(["alias", decl.name, describe_field_type(decl.element)])

    parts: list[str] = [
        "# Inferred declarations\n",
        render_markdown_table(["Kind", "Name", "Fields / Type"], rows),
    ]
    for decl in schema.declarations:
        rendered = render(decl, names)
        code: str = rendered.type_text
        if rendered.decoder_text is not None:
            code += "\n" + rendered.decoder_text
        parts.append(f"## {decl.name}\n\n```haskell\n{code}```\n")
    if len(schema.diagnostics):
        parts.append("## Diagnostics\n")
        parts.append("".join(f"- **{d.level.value}**: {d.message}\n" for d in schema.diagnostics))
    return "\n".join(parts)
