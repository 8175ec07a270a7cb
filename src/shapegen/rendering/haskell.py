# topmark:header:start
#
#   project      : ShapeGen
#   file         : haskell.py
#   file_relpath : src/shapegen/rendering/haskell.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render resolved declarations as Haskell source text.

Each record yields two text blocks:

* a ``data`` declaration whose field names (prefixed with ``_``) are padded to
  one column past the longest field name so the ``::`` separators line up;
* a ``FromJSON`` instance that reads every field in declared order with
  ``v .: "key"``, joined by ``<*>``, and falls back to ``empty`` for any
  non-object input.

Aliases yield a single ``type`` synonym line. All blocks end with a newline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from shapegen.config.types import TypeNames
from shapegen.schema.model import (
    AliasDecl,
    Primitive,
    PrimitiveKind,
    RecordDecl,
    RecordRef,
    SequenceOf,
    Unknown,
)

if TYPE_CHECKING:
    from shapegen.schema.model import FieldType, ResolvedDeclaration

DERIVING_CLAUSE: Final[str] = "} deriving (Show, Data, Typeable)"

FIELD_PREFIX: Final[str] = "_"

PARSE_OBJECT_PREAMBLE: Final[str] = "  parseJSON (Object v) = "
PARSE_FALLBACK_LINE: Final[str] = "  parseJSON _            = empty"

# The ``v .:`` lookups are right-aligned under the preamble's ``=`` column.
LOOKUP_WIDTH: Final[int] = len(PARSE_OBJECT_PREAMBLE)


@dataclass(frozen=True)
class RenderedDeclaration:
    """Text artifacts for one declaration.

    Attributes:
        name (str): The declared name.
        type_text (str): The ``data`` or ``type`` declaration.
        decoder_text (str | None): The ``FromJSON`` instance (records only).
    """

    name: str
    type_text: str
    decoder_text: str | None

    @property
    def is_record(self) -> bool:
        """True for records (which are the only declarations with a decoder)."""
        return self.decoder_text is not None


def escape_comment(text: str) -> str:
    """Make a sample string safe for a single-line trailing comment."""
    return text.replace("\r", "\\r").replace("\n", "\\n")


def string_literal(text: str) -> str:
    """Return ``text`` as a Haskell string literal."""
    out: list[str] = []
    for ch in text:
        if ch in ('"', "\\"):
            out.append("\\" + ch)
        elif ch == "\n":
            out.append("\\n")
        elif ord(ch) < 0x20:
            out.append(f"\\{ord(ch)}\\&")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def render_field_type(field_type: FieldType, names: TypeNames, *, annotate: bool = True) -> str:
    """Return the type expression for a resolved field type.

    Args:
        field_type (FieldType): The resolved type.
        names (TypeNames): Target type names.
        annotate (bool): Allow a trailing sample comment on text types. Disabled
            inside sequences where a comment would swallow the closing bracket.

    Returns:
        str: The rendered type expression.
    """
    if isinstance(field_type, Primitive):
        if field_type.kind == PrimitiveKind.TEXT:
            if annotate and names.sample_comments and field_type.sample is not None:
                return f"{names.text} -- {escape_comment(field_type.sample)}".rstrip()
            return names.text
        return {
            PrimitiveKind.NUMBER: names.number,
            PrimitiveKind.BOOL: names.boolean,
            PrimitiveKind.NULL: names.null,
        }[field_type.kind]
    if isinstance(field_type, RecordRef):
        return field_type.name
    if isinstance(field_type, SequenceOf):
        if isinstance(field_type.element, Unknown):
            return f"[{names.unknown}]"
        return f"[ {render_field_type(field_type.element, names, annotate=False)} ]"
    return names.unknown


def render_record_type(decl: RecordDecl[FieldType], names: TypeNames) -> str:
    """Render the ``data`` declaration of a record."""
    lines: list[str] = [f"data {decl.name} = {decl.name} {{"]
    width: int = 1 + max((len(field_name) for field_name in decl.field_names), default=0)
    for index, (field_name, field_type) in enumerate(decl.fields):
        lead: str = "   " if index == 0 else "  ,"
        label: str = (FIELD_PREFIX + field_name).ljust(width)
        lines.append(f"{lead} {label} :: {render_field_type(field_type, names)}")
    lines.append(DERIVING_CLAUSE)
    return "\n".join(lines) + "\n"


def render_record_decoder(decl: RecordDecl[FieldType]) -> str:
    """Render the ``FromJSON`` instance of a record."""
    lines: list[str] = [f"instance FromJSON {decl.name} where"]
    if not decl.fields:
        lines.append(f"  parseJSON (Object _) = pure {decl.name}")
    else:
        lines.append(f"{PARSE_OBJECT_PREAMBLE}{decl.name} <$>")
        last: int = len(decl.fields) - 1
        for index, field_name in enumerate(decl.field_names):
            lookup: str = f"{'v .:'.rjust(LOOKUP_WIDTH)} {string_literal(field_name)}"
            lines.append(lookup if index == last else f"{lookup} <*>")
    lines.append(PARSE_FALLBACK_LINE)
    return "\n".join(lines) + "\n"


def render_alias(decl: AliasDecl[FieldType], names: TypeNames) -> str:
    """Render the ``type`` synonym of an alias."""
    return f"type {decl.name} = {render_field_type(decl.element, names)}\n"


def render(decl: ResolvedDeclaration, names: TypeNames | None = None) -> RenderedDeclaration:
    """Render one resolved declaration.

    Args:
        decl (ResolvedDeclaration): A record or alias with resolved payloads.
        names (TypeNames | None): Target type names; defaults when None.

    Returns:
        RenderedDeclaration: The type text and, for records, the decoder text.
    """
    names = names or TypeNames()
    if isinstance(decl, RecordDecl):
        return RenderedDeclaration(
            name=decl.name,
            type_text=render_record_type(decl, names),
            decoder_text=render_record_decoder(decl),
        )
    return RenderedDeclaration(name=decl.name, type_text=render_alias(decl, names), decoder_text=None)
