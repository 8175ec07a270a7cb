# topmark:header:start
#
#   project      : ShapeGen
#   file         : api.py
#   file_relpath : src/shapegen/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public API for ShapeGen.

The functions here are thin wrappers around the inference pipeline
(`shapegen.schema`), the renderers (`shapegen.rendering`) and the output
model (`shapegen.output`), so tools can use ShapeGen without the CLI.

Configuration contract
----------------------
Every function that takes ``config`` accepts either a frozen
`shapegen.config.model.Config`, a plain mapping with the TOML shape, or
``None`` for the packaged defaults. No project config discovery happens
here; that is a CLI concern.

```python
from shapegen import api

document = api.load_document('{"id": 1, "owner": {"id": 2, "name": "x"}}')
schema = api.infer(document, config={"inference": {"root_name": "Repo"}})
for rendered in api.render_declarations(schema):
    print(rendered.type_text)
```

Every call builds its own registry; two calls never share state.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from shapegen.config.logging import get_logger
from shapegen.config.model import Config, MutableConfig
from shapegen.naming import path_to_module_name, url_to_module_name
from shapegen.output.model import GeneratedModule
from shapegen.rendering.haskell import render
from shapegen.rendering.module import build_module_context, render_module
from shapegen.schema.finalizer import finalize
from shapegen.schema.resolver import element_policy_for
from shapegen.schema.walker import walk_document

if TYPE_CHECKING:
    from shapegen.config.logging import ShapegenLogger
    from shapegen.rendering.haskell import RenderedDeclaration
    from shapegen.schema.finalizer import FinalizedSchema
    from shapegen.schema.model import JsonValue

logger: ShapegenLogger = get_logger(__name__)

ConfigLike = Config | Mapping[str, Any] | None

__all__ = [
    "ConfigLike",
    "DocumentError",
    "build_module",
    "generate_module",
    "infer",
    "load_document",
    "module_name_for",
    "render_declarations",
    "resolve_config",
]


class DocumentError(ValueError):
    """Raised when a JSON document cannot be read or parsed."""


def resolve_config(config: ConfigLike = None) -> Config:
    """Return a frozen `Config` for ``config`` (defaults merged under a mapping)."""
    if isinstance(config, Config):
        return config
    draft: MutableConfig = MutableConfig.from_defaults()
    if config is not None:
        draft = draft.merge_with(MutableConfig.from_toml_dict(dict(config)))
    return draft.freeze()


def load_document(source: Path | str) -> JsonValue:
    """Parse a JSON document.

    Args:
        source (Path | str): A `Path` is read from disk (UTF-8); a `str` is
            parsed as JSON text.

    Returns:
        JsonValue: The parsed document. Object key order is preserved.

    Raises:
        DocumentError: If the file cannot be read or the text is not valid JSON.
    """
    if isinstance(source, Path):
        try:
            text: str = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentError(f"Cannot read {source}: {exc}") from exc
        origin: str = str(source)
    else:
        text = source
        origin = "<text>"
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentError(
            f"{origin}: invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"
        ) from exc


def infer(document: JsonValue, config: ConfigLike = None) -> FinalizedSchema:
    """Walk ``document`` with a fresh registry and finalize its declarations."""
    cfg: Config = resolve_config(config)
    registry = walk_document(
        document, root_name=cfg.root_name, declare_root=cfg.declare_root
    )
    return finalize(registry, policy=element_policy_for(cfg.scalar_sequences))


def render_declarations(
    schema: FinalizedSchema, config: ConfigLike = None
) -> list[RenderedDeclaration]:
    """Render every finalized declaration with the configured type names."""
    cfg: Config = resolve_config(config)
    return [render(decl, cfg.type_names) for decl in schema.declarations]


def module_name_for(
    config: ConfigLike = None,
    *,
    path: str | None = None,
    url: str | None = None,
    explicit: str | None = None,
) -> str:
    """Choose the module name for a generated module.

    Precedence: ``explicit`` as is, then the documentation ``url``, then the
    documentation ``path`` (both prefixed with the configured namespace),
    then ``<namespace>.<root_name>``.
    """
    cfg: Config = resolve_config(config)
    if explicit:
        return explicit
    if url:
        return url_to_module_name(cfg.namespace, url)
    if path:
        return path_to_module_name(cfg.namespace, path)
    return ".".join(part for part in (cfg.namespace, cfg.root_name) if part)


def generate_module(
    document: JsonValue, module_name: str, config: ConfigLike = None
) -> GeneratedModule:
    """Infer, render and package ``document`` as a complete module.

    Args:
        document (JsonValue): Parsed JSON document.
        module_name (str): Dotted module name.
        config (ConfigLike): Runtime config, TOML-shaped mapping, or None.

    Returns:
        GeneratedModule: Module text and its target path below the output directory.
    """
    cfg: Config = resolve_config(config)
    return build_module(infer(document, cfg), module_name, cfg)


def build_module(
    schema: FinalizedSchema, module_name: str, config: ConfigLike = None
) -> GeneratedModule:
    """Render an already finalized ``schema`` as a module placed below the output directory."""
    cfg: Config = resolve_config(config)
    ctx = build_module_context(module_name, schema.declarations, cfg.type_names)
    module = GeneratedModule.build(
        module_name,
        render_module(ctx),
        output_dir=cfg.output_dir,
        extension=cfg.extension,
    )
    logger.debug("Generated module %s -> %s", module.module_name, module.path)
    return module
