# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/schema/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shape inference: walk a JSON document, then resolve its declarations.

Typical usage:
    ```python
    from shapegen.schema import finalize, walk_document

    registry = walk_document(document, root_name="Root")
    schema = finalize(registry)
    for decl in schema.declarations:
        print(decl.name)
    ```
"""

from __future__ import annotations

from shapegen.schema.finalizer import FinalizedSchema, finalize
from shapegen.schema.model import (
    UNKNOWN,
    AliasDecl,
    FieldType,
    Primitive,
    PrimitiveKind,
    RecordDecl,
    RecordRef,
    SequenceOf,
    ShapeKey,
    Unknown,
    shape_key,
)
from shapegen.schema.registry import ShapeRegistry
from shapegen.schema.resolver import (
    element_policy_for,
    first_resolvable_element,
    first_resolvable_or_scalar_element,
    resolve,
)
from shapegen.schema.walker import walk, walk_document

__all__ = [
    "UNKNOWN",
    "AliasDecl",
    "FieldType",
    "FinalizedSchema",
    "Primitive",
    "PrimitiveKind",
    "RecordDecl",
    "RecordRef",
    "SequenceOf",
    "ShapeKey",
    "ShapeRegistry",
    "Unknown",
    "element_policy_for",
    "finalize",
    "first_resolvable_element",
    "first_resolvable_or_scalar_element",
    "resolve",
    "shape_key",
    "walk",
    "walk_document",
]
