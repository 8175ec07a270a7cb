# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering of finalized declarations into Haskell source and reports."""

from __future__ import annotations

from shapegen.rendering.formats import OutputFormat
from shapegen.rendering.haskell import RenderedDeclaration, render
from shapegen.rendering.module import ModuleContext, build_module_context, render_module

__all__ = [
    "ModuleContext",
    "OutputFormat",
    "RenderedDeclaration",
    "build_module_context",
    "render",
    "render_module",
]
