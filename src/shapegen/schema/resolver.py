# topmark:header:start
#
#   project      : ShapeGen
#   file         : resolver.py
#   file_relpath : src/shapegen/schema/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve raw JSON values to field types against a completed registry.

Resolution is a pure, read-only pass. Objects resolve through the registry's
shape index; arrays delegate to an element policy. The default policy assumes
homogeneous arrays: the first element that resolves to a registered shape
decides the element type, and everything after it is ignored.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING

from shapegen.schema.model import (
    UNKNOWN,
    FieldType,
    Primitive,
    PrimitiveKind,
    RecordRef,
    SequenceOf,
)

if TYPE_CHECKING:
    from shapegen.schema.model import JsonValue, RecordDecl
    from shapegen.schema.registry import ShapeRegistry

ElementPolicy = Callable[["ShapeRegistry", Sequence["JsonValue"]], FieldType]
"""Decides the element type of an array: ``(registry, elements) -> FieldType``."""


def resolve_scalar(value: JsonValue) -> Primitive | None:
    """Return the primitive marker for a scalar or null, None for containers."""
    if value is None:
        return Primitive(PrimitiveKind.NULL)
    # bool is an int subclass: test it first.
    if isinstance(value, bool):
        return Primitive(PrimitiveKind.BOOL)
    if isinstance(value, (int, float)):
        return Primitive(PrimitiveKind.NUMBER)
    if isinstance(value, str):
        return Primitive(PrimitiveKind.TEXT, sample=value)
    return None


def resolve_object(registry: ShapeRegistry, obj: Mapping[str, JsonValue]) -> FieldType:
    """Return a reference to the registered shape of ``obj`` or the sentinel."""
    decl: RecordDecl[JsonValue] | None = registry.lookup(obj)
    if decl is None:
        return UNKNOWN
    return RecordRef(decl.name)


def first_resolvable_element(registry: ShapeRegistry, elements: Sequence[JsonValue]) -> FieldType:
    """Element policy: the first object element with a registered shape wins.

    Arrays without such an element (empty arrays, scalar-only arrays, arrays of
    unregistered objects) resolve to a sequence of the sentinel.
    """
    for element in elements:
        if isinstance(element, Mapping):
            decl: RecordDecl[JsonValue] | None = registry.lookup(element)
            if decl is not None:
                return SequenceOf(RecordRef(decl.name))
    return SequenceOf(UNKNOWN)


def first_resolvable_or_scalar_element(
    registry: ShapeRegistry, elements: Sequence[JsonValue]
) -> FieldType:
    """Element policy: like `first_resolvable_element`, but scalars resolve too.

    The first element that is either a registered object or a non-null scalar
    decides the element type.
    """
    for element in elements:
        if isinstance(element, Mapping):
            decl: RecordDecl[JsonValue] | None = registry.lookup(element)
            if decl is not None:
                return SequenceOf(RecordRef(decl.name))
        elif element is not None and not isinstance(element, list):
            scalar: Primitive | None = resolve_scalar(element)
            if scalar is not None:
                return SequenceOf(scalar)
    return SequenceOf(UNKNOWN)


def resolve(
    registry: ShapeRegistry,
    value: JsonValue,
    *,
    policy: ElementPolicy = first_resolvable_element,
) -> FieldType:
    """Map a raw JSON value to a field type.

    Args:
        registry (ShapeRegistry): The completed registry of the run.
        value (JsonValue): The raw value recorded for a field or alias.
        policy (ElementPolicy): How arrays pick their element type.

    Returns:
        FieldType: A primitive marker, a record reference, a sequence, or the
        `Unknown` sentinel.
    """
    if isinstance(value, Mapping):
        return resolve_object(registry, value)
    if isinstance(value, list):
        return policy(registry, value)
    scalar: Primitive | None = resolve_scalar(value)
    return scalar if scalar is not None else UNKNOWN


def element_policy_for(scalar_sequences: bool) -> ElementPolicy:
    """Return the element policy selected by the ``scalar_sequences`` setting."""
    return first_resolvable_or_scalar_element if scalar_sequences else first_resolvable_element
