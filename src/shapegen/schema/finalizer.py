# topmark:header:start
#
#   project      : ShapeGen
#   file         : finalizer.py
#   file_relpath : src/shapegen/schema/finalizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Turn a completed registry into the printable declaration list.

Finalization deduplicates ``registry.discovered`` by declared name (the first
occurrence wins) and resolves every record field and alias payload.

Two differently shaped objects can end up with the same declared name (for
example two ``owner`` keys in different parents). Only the first is kept; the
others are reported as name collisions in the diagnostics rather than renamed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shapegen.config.logging import get_logger
from shapegen.diagnostic.model import DiagnosticLog
from shapegen.schema.model import AliasDecl, RecordDecl, describe_field_type, is_unresolved
from shapegen.schema.resolver import first_resolvable_element, resolve

if TYPE_CHECKING:
    from shapegen.config.logging import ShapegenLogger
    from shapegen.schema.model import Declaration, FieldType, ResolvedDeclaration
    from shapegen.schema.registry import ShapeRegistry
    from shapegen.schema.resolver import ElementPolicy

logger: ShapegenLogger = get_logger(__name__)


@dataclass(frozen=True)
class FinalizedSchema:
    """Resolved declarations in discovery order plus the findings of the run.

    Attributes:
        declarations (tuple[ResolvedDeclaration, ...]): Unique by name.
        diagnostics (DiagnosticLog): Name collisions and unresolved types.
    """

    declarations: tuple[ResolvedDeclaration, ...]
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @property
    def record_names(self) -> list[str]:
        """Names of record declarations only, in discovery order."""
        return [d.name for d in self.declarations if isinstance(d, RecordDecl)]

    @property
    def records(self) -> list[RecordDecl[FieldType]]:
        """Record declarations only, in discovery order."""
        return [d for d in self.declarations if isinstance(d, RecordDecl)]

    def get(self, name: str) -> ResolvedDeclaration | None:
        """Return the declaration named ``name``, if any."""
        return next((d for d in self.declarations if d.name == name), None)


def dedupe_by_name(
    declarations: list[Declaration], diagnostics: DiagnosticLog
) -> list[Declaration]:
    """Keep the first declaration per name and report colliding later ones.

    Args:
        declarations (list[Declaration]): Declarations in discovery order.
        diagnostics (DiagnosticLog): Receives a warning per collision.

    Returns:
        list[Declaration]: The unique declarations, order preserved.
    """
    kept: dict[str, Declaration] = {}
    for decl in declarations:
        first: Declaration | None = kept.get(decl.name)
        if first is None:
            kept[decl.name] = decl
            continue
        if first.identity != decl.identity:
            message: str = f"Name collision: {_describe(decl)} dropped in favor of {_describe(first)}"
            logger.warning(message)
            diagnostics.add_warning(message)
    return list(kept.values())


def _describe(decl: Declaration) -> str:
    if isinstance(decl, RecordDecl):
        return f"record {decl.name!r} ({', '.join(decl.field_names) or 'no fields'})"
    return f"alias {decl.name!r} (length {len(decl.element)})"


def resolve_declaration(
    registry: ShapeRegistry,
    decl: Declaration,
    *,
    policy: ElementPolicy,
    diagnostics: DiagnosticLog,
) -> ResolvedDeclaration:
    """Resolve the payloads of one declaration, reporting unresolved types."""
    if isinstance(decl, AliasDecl):
        element: FieldType = resolve(registry, decl.element, policy=policy)
        if is_unresolved(element):
            diagnostics.add_warning(
                f"Unresolved element type for alias {decl.name!r}: "
                f"{describe_field_type(element)} needs manual correction"
            )
        return AliasDecl(name=decl.name, element=element)

    resolved: list[tuple[str, FieldType]] = []
    for field_name, value in decl.fields:
        field_type: FieldType = resolve(registry, value, policy=policy)
        if is_unresolved(field_type):
            diagnostics.add_warning(
                f"Unresolved type for field {decl.name}.{field_name}: "
                f"{describe_field_type(field_type)} needs manual correction"
            )
        resolved.append((field_name, field_type))
    return RecordDecl(name=decl.name, fields=tuple(resolved))


def finalize(
    registry: ShapeRegistry,
    *,
    policy: ElementPolicy = first_resolvable_element,
) -> FinalizedSchema:
    """Deduplicate and resolve the declarations of a completed walk.

    Args:
        registry (ShapeRegistry): Registry populated by the walker; not mutated.
        policy (ElementPolicy): Element policy passed to the resolver.

    Returns:
        FinalizedSchema: Resolved declarations and the diagnostics of the run.
    """
    diagnostics = DiagnosticLog()

    for shape, names in registry.names_by_shape().items():
        if len(names) > 1:
            winner: str = registry.by_shape[shape].name
            diagnostics.add_info(
                f"Shape ({', '.join(sorted(shape)) or 'no fields'}) declared as "
                f"{', '.join(names)}; nested values of this shape resolve to {winner!r}"
            )

    unique: list[Declaration] = dedupe_by_name(registry.discovered, diagnostics)
    declarations: tuple[ResolvedDeclaration, ...] = tuple(
        resolve_declaration(registry, decl, policy=policy, diagnostics=diagnostics)
        for decl in unique
    )
    logger.debug(
        "Finalized %d declaration(s) from %d discovered (%d diagnostic(s))",
        len(declarations),
        len(registry.discovered),
        len(diagnostics),
    )
    return FinalizedSchema(declarations=declarations, diagnostics=diagnostics)
