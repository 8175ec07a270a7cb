# topmark:header:start
#
#   project      : ShapeGen
#   file         : walker.py
#   file_relpath : src/shapegen/schema/walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Recursive JSON walker that discovers object and collection shapes.

The walker is driven purely by the shape of the data:

* **object**: its shape is indexed in the registry before its children are
  visited; every ``key: value`` pair is then walked as ``PascalCase(key)``,
  and finally the record is appended to ``discovered``.
* **array**: every element is walked as ``PascalCase(singularize(name))``;
  the alias (carrying the array itself) is appended afterwards.
* **scalar / null**: nothing to declare.

Appending after the children means nested shapes come before the shapes that
contain them in ``discovered``. Field order follows the mapping's iteration
order, which for ``json.load`` output is the order of the keys in the source.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from shapegen.config.logging import get_logger
from shapegen.naming import pascal_case, singularize
from shapegen.schema.model import AliasDecl, RecordDecl
from shapegen.schema.registry import ShapeRegistry

if TYPE_CHECKING:
    from shapegen.config.logging import ShapegenLogger
    from shapegen.schema.model import JsonValue

logger: ShapegenLogger = get_logger(__name__)


def walk(registry: ShapeRegistry, name: str, value: JsonValue) -> None:
    """Walk ``value`` under the declared ``name``, mutating ``registry``.

    Args:
        registry (ShapeRegistry): The accumulator for the current run.
        name (str): Type name to declare if ``value`` is an object or array.
        value (JsonValue): Any JSON value.
    """
    if isinstance(value, Mapping):
        record: RecordDecl[JsonValue] = RecordDecl(name=name, fields=tuple(value.items()))
        registry.register_shape(record)
        for key, child in value.items():
            walk(registry, pascal_case(key), child)
        registry.add(record)
    elif isinstance(value, list):
        element_name: str = pascal_case(singularize(name))
        for element in value:
            walk(registry, element_name, element)
        registry.add(AliasDecl(name=name, element=value))


def walk_document(
    document: JsonValue,
    *,
    root_name: str,
    declare_root: bool = True,
    registry: ShapeRegistry | None = None,
) -> ShapeRegistry:
    """Walk a whole document and return the populated registry.

    Args:
        document (JsonValue): Parsed JSON document.
        root_name (str): Name for the top-level declaration.
        declare_root (bool): When False, only the members of a top-level
            object are walked and the document itself is not declared.
        registry (ShapeRegistry | None): Registry to fill; a fresh one by default.

    Returns:
        ShapeRegistry: The registry holding every discovered declaration.
    """
    registry = registry if registry is not None else ShapeRegistry()
    if declare_root:
        walk(registry, root_name, document)
    elif isinstance(document, Mapping):
        for key, child in document.items():
            walk(registry, pascal_case(key), child)
    else:
        logger.debug("Top-level value is not an object; nothing to walk without a root record")
    logger.debug(
        "Walk complete: %d declaration(s), %d distinct shape(s)",
        len(registry.discovered),
        len(registry.by_shape),
    )
    return registry
