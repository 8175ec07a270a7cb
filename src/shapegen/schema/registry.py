# topmark:header:start
#
#   project      : ShapeGen
#   file         : registry.py
#   file_relpath : src/shapegen/schema/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shape registry: the accumulator threaded through one walk.

The registry has two views of what the walker found:

* ``by_shape`` maps a `ShapeKey` to the most recently seen record with that
  field set. The resolver uses it to turn a nested object into a type name.
* ``discovered`` lists every distinct declaration in discovery order. It is the
  source of truth for output order.

A registry belongs to exactly one inference run. Sharing one between
unrelated documents would mix their shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from shapegen.config.logging import get_logger
from shapegen.schema.model import RecordDecl, shape_key

if TYPE_CHECKING:
    from shapegen.config.logging import ShapegenLogger
    from shapegen.schema.model import Declaration, JsonValue, ShapeKey

logger: ShapegenLogger = get_logger(__name__)


@dataclass
class ShapeRegistry:
    """Mutable shape accumulator for a single inference run.

    Attributes:
        by_shape (dict[ShapeKey, RecordDecl[JsonValue]]): Latest record per shape.
        discovered (list[Declaration]): Distinct declarations in discovery order.
    """

    by_shape: dict[ShapeKey, RecordDecl[JsonValue]] = field(default_factory=lambda: {})
    discovered: list[Declaration] = field(default_factory=lambda: [])
    _identities: set[Any] = field(default_factory=lambda: set(), init=False, repr=False)

    def register_shape(self, decl: RecordDecl[JsonValue]) -> None:
        """Index ``decl`` under its shape key, replacing any previous entry."""
        previous: RecordDecl[JsonValue] | None = self.by_shape.get(decl.shape)
        if previous is not None and previous.name != decl.name:
            logger.debug(
                "Shape %s re-registered: %r replaces %r",
                sorted(decl.shape),
                decl.name,
                previous.name,
            )
        self.by_shape[decl.shape] = decl

    def add(self, decl: Declaration) -> bool:
        """Append ``decl`` unless an equal declaration was already discovered.

        Two records are equal when they share name and field set; two aliases
        when they share name and array contents.

        Returns:
            bool: True if the declaration was appended.
        """
        if decl.identity in self._identities:
            logger.trace("Skipping repeated %s declaration %r", decl.kind.value, decl.name)
            return False
        self._identities.add(decl.identity)
        self.discovered.append(decl)
        logger.trace("Discovered %s declaration %r", decl.kind.value, decl.name)
        return True

    def lookup(self, obj: Mapping[str, JsonValue]) -> RecordDecl[JsonValue] | None:
        """Return the record registered for the shape of ``obj``, if any."""
        return self.by_shape.get(shape_key(obj))

    def names_by_shape(self) -> dict[ShapeKey, list[str]]:
        """Return every record name seen per shape, in discovery order."""
        out: dict[ShapeKey, list[str]] = {}
        for decl in self.discovered:
            if isinstance(decl, RecordDecl):
                names: list[str] = out.setdefault(decl.shape, [])
                if decl.name not in names:
                    names.append(decl.name)
        return out
