# topmark:header:start
#
#   project      : ShapeGen
#   file         : model.py
#   file_relpath : src/shapegen/schema/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Data model for inferred shapes and their declarations.

Declarations are parameterized over their payload: while the walker runs,
record fields and alias payloads hold the raw JSON values they were discovered
with; the finalizer replaces those values with resolved `FieldType` references.

Sections:
    * JSON value aliases and `ShapeKey`.
    * Field types: `Primitive`, `RecordRef`, `SequenceOf`, `Unknown`.
    * Declarations: `RecordDecl`, `AliasDecl`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

JsonValue = Any
"""Any value produced by ``json.load`` (dict, list, str, int, float, bool, None)."""

JsonObject = Mapping[str, JsonValue]

ShapeKey = frozenset[str]
"""Structural identity of a JSON object: the set of its field names."""


def shape_key(obj: Mapping[str, JsonValue]) -> ShapeKey:
    """Return the order-independent shape key of a JSON object."""
    return frozenset(obj.keys())


# ------------------ Field types ------------------


class PrimitiveKind(str, Enum):
    """Scalar JSON kinds that map to a fixed type name."""

    TEXT = "text"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


@dataclass(frozen=True)
class Primitive:
    """Primitive marker. ``sample`` carries the example string for TEXT fields."""

    kind: PrimitiveKind
    sample: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class RecordRef:
    """Reference to a declared record by name."""

    name: str


@dataclass(frozen=True)
class Unknown:
    """Sentinel for a type that could not be resolved."""


@dataclass(frozen=True)
class SequenceOf:
    """A list whose elements all have ``element`` type."""

    element: FieldType


FieldType = Union[Primitive, RecordRef, SequenceOf, Unknown]

UNKNOWN: Unknown = Unknown()


def is_unresolved(field_type: FieldType) -> bool:
    """Return True if the type is the sentinel or a sequence of the sentinel."""
    if isinstance(field_type, SequenceOf):
        return is_unresolved(field_type.element)
    return isinstance(field_type, Unknown)


def describe_field_type(field_type: FieldType) -> str:
    """Return a language-neutral description, e.g. ``"[Owner]"`` or ``"Text"``."""
    if isinstance(field_type, Primitive):
        return {
            PrimitiveKind.TEXT: "Text",
            PrimitiveKind.NUMBER: "Number",
            PrimitiveKind.BOOL: "Bool",
            PrimitiveKind.NULL: "Maybe<unknown>",
        }[field_type.kind]
    if isinstance(field_type, RecordRef):
        return field_type.name
    if isinstance(field_type, SequenceOf):
        return f"[{describe_field_type(field_type.element)}]"
    return "Unknown"


# ------------------ Declarations ------------------

V = TypeVar("V")


class DeclKind(str, Enum):
    """Declaration variants."""

    RECORD = "record"
    ALIAS = "alias"


@dataclass(frozen=True)
class RecordDecl(Generic[V]):
    """A named object shape with its fields in first-seen key order.

    Attributes:
        name (str): Declared type name.
        fields (tuple[tuple[str, V], ...]): ``(field name, payload)`` pairs. The
            payload is the raw JSON value while walking and a `FieldType`
            once finalized.
    """

    name: str
    fields: tuple[tuple[str, V], ...]

    kind = DeclKind.RECORD

    @property
    def field_names(self) -> tuple[str, ...]:
        """Field names in declared order."""
        return tuple(name for name, _ in self.fields)

    @property
    def shape(self) -> ShapeKey:
        """The shape key of this record."""
        return frozenset(self.field_names)

    @property
    def identity(self) -> tuple[DeclKind, str, ShapeKey]:
        """Equality key used to avoid duplicate declarations while walking."""
        return (self.kind, self.name, self.shape)


@dataclass(frozen=True)
class AliasDecl(Generic[V]):
    """A named collection whose element type is resolved from ``element``.

    Attributes:
        name (str): Declared synonym name.
        element (V): The raw JSON array while walking, a `FieldType` once finalized.
    """

    name: str
    element: V

    kind = DeclKind.ALIAS

    @property
    def identity(self) -> tuple[DeclKind, str, str]:
        """Equality key used to avoid duplicate declarations while walking.

        Aliases are equal when they share a name and array contents; the
        contents are compared through their canonical JSON text.
        """
        return (self.kind, self.name, json.dumps(self.element, sort_keys=True, default=repr))


Declaration = Union[RecordDecl[JsonValue], AliasDecl[JsonValue]]
"""A declaration as discovered by the walker (raw JSON payloads)."""

ResolvedDeclaration = Union[RecordDecl[FieldType], AliasDecl[FieldType]]
"""A declaration whose payloads were resolved to field types."""
