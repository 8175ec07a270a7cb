# topmark:header:start
#
#   project      : ShapeGen
#   file         : module.py
#   file_relpath : src/shapegen/rendering/module.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Package rendered declarations into a Haskell module.

`build_module_context` collects, in discovery order, the declared record
names (aliases are not exported), every type text and every decoder text.
`render_module` lays the context out as a complete source file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from shapegen.config.logging import get_logger
from shapegen.rendering.haskell import RenderedDeclaration, render

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shapegen.config.logging import ShapegenLogger
    from shapegen.config.types import TypeNames
    from shapegen.schema.model import ResolvedDeclaration

logger: ShapegenLogger = get_logger(__name__)

LANGUAGE_PRAGMAS: Final[tuple[str, ...]] = (
    "DeriveDataTypeable",
    "OverloadedStrings",
)

IMPORTS: Final[tuple[str, ...]] = (
    "import           Control.Applicative   (empty, (<$>), (<*>))",
    "import           Data.Aeson",
    "import qualified Data.ByteString       as BS",
    "import           Data.Data",
)


@dataclass(frozen=True)
class ModuleContext:
    """Everything needed to write one generated module.

    Attributes:
        module_name (str): Dotted module name.
        declared_names (tuple[str, ...]): Record names, exported with ``(..)``.
        type_texts (tuple[str, ...]): ``data``/``type`` declarations.
        decoder_texts (tuple[str, ...]): ``FromJSON`` instances of the records.
    """

    module_name: str
    declared_names: tuple[str, ...]
    type_texts: tuple[str, ...]
    decoder_texts: tuple[str, ...]


def build_module_context(
    module_name: str,
    declarations: Iterable[ResolvedDeclaration],
    names: TypeNames | None = None,
) -> ModuleContext:
    """Render ``declarations`` and collect them into a module context.

    Args:
        module_name (str): Dotted module name.
        declarations (Iterable[ResolvedDeclaration]): Finalized declarations.
        names (TypeNames | None): Target type names.

    Returns:
        ModuleContext: The context in discovery order.
    """
    rendered: list[RenderedDeclaration] = [render(decl, names) for decl in declarations]
    return ModuleContext(
        module_name=module_name,
        declared_names=tuple(r.name for r in rendered if r.is_record),
        type_texts=tuple(r.type_text for r in rendered),
        decoder_texts=tuple(r.decoder_text for r in rendered if r.decoder_text is not None),
    )


def _pragma_lines() -> list[str]:
    width: int = max(len(p) for p in LANGUAGE_PRAGMAS)
    return [f"{{-# LANGUAGE {p.ljust(width)} #-}}" for p in LANGUAGE_PRAGMAS]


def _export_lines(declared_names: tuple[str, ...]) -> list[str]:
    if not declared_names:
        return []
    lines: list[str] = []
    for index, name in enumerate(declared_names):
        lead: str = "    ( " if index == 0 else "    , "
        lines.append(f"{lead}{name}(..)")
    lines.append("    )")
    return lines


def render_module(ctx: ModuleContext) -> str:
    """Render a module context as Haskell source.

    Layout: language pragmas, the module header with its export list, the
    import block, every type text, then every decoder text, blocks separated
    by one blank line.
    """
    header: list[str] = [*_pragma_lines(), "", f"module {ctx.module_name}"]
    header.extend(_export_lines(ctx.declared_names))
    header.append("    where" if ctx.declared_names else "  where")
    header.append("")
    header.extend(IMPORTS)

    blocks: list[str] = ["\n".join(header) + "\n"]
    blocks.extend(ctx.type_texts)
    blocks.extend(ctx.decoder_texts)
    text: str = "\n".join(blocks)
    logger.debug(
        "Rendered module %s: %d type(s), %d decoder(s)",
        ctx.module_name,
        len(ctx.type_texts),
        len(ctx.decoder_texts),
    )
    return text
