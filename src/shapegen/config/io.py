# topmark:header:start
#
#   project      : ShapeGen
#   file         : io.py
#   file_relpath : src/shapegen/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight TOML I/O helpers for ShapeGen configuration.

This module centralizes **pure** helpers for reading and writing the TOML used
by the configuration layer, so the model classes stay small.

Typical flow:
    1. Load defaults from the packaged resource (``load_defaults_dict``).
    2. Load project TOML files (``load_toml_dict``).
    3. Inspect values with the typed getters (``get_table_value``, ...).
    4. Serialize back to TOML when needed (``to_toml``).
    5. Optionally nest a document under ``[tool.shapegen]`` with
       ``nest_toml_under_section`` (comments preserved through ``tomlkit``).
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, TypeGuard

import toml
import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError
from tomlkit.items import Table

from shapegen.config.logging import get_logger
from shapegen.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE

if TYPE_CHECKING:
    from pathlib import Path

    from shapegen.config.logging import ShapegenLogger

logger: ShapegenLogger = get_logger(__name__)

TomlTable = dict[str, Any]

__all__: list[str] = [
    "TomlTable",
    "is_toml_table",
    "get_table_value",
    "get_string_value_or_none",
    "get_bool_value_or_none",
    "load_defaults_dict",
    "load_defaults_text",
    "load_toml_dict",
    "to_toml",
    "nest_toml_under_section",
]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping."""
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table; an empty dict if missing or not a table.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present and a mapping, otherwise an empty dict.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value; numbers and booleans are coerced with ``str``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The (coerced) string, or ``None`` when absent or not coercible.
    """
    value: Any | None = table.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value; integers are coerced with ``bool``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        bool | None: The (coerced) boolean, or ``None`` when absent or not coercible.
    """
    value: Any | None = table.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    return None


def load_defaults_text() -> str:
    """Return the packaged default configuration as raw TOML text (comments kept).

    Raises:
        RuntimeError: If the bundled resource cannot be read.
    """
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    logger.debug("Loading defaults from package resource: %s", resource)
    try:
        return resource.read_text(encoding="utf8")
    except OSError as exc:
        raise RuntimeError(
            f"Cannot read bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r}: {exc}"
        ) from exc


def load_defaults_dict() -> TomlTable:
    """Return the packaged default configuration as a Python dict.

    Raises:
        RuntimeError: If the bundled default config cannot be read or parsed.
    """
    text: str = load_defaults_text()
    try:
        return toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise RuntimeError(
            f"Bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r} is invalid TOML: {exc}"
        ) from exc


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Errors are logged and an empty dict is returned on failure.

    Args:
        path (Path): Path to a TOML document (``shapegen.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.
    """
    try:
        return toml.load(path)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
    except toml.TomlDecodeError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
    return {}


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string."""
    return toml.dumps(toml_dict)


def nest_toml_under_section(toml_doc: str, section_keys: str) -> str:
    """Return ``toml_doc`` nested under a dotted section such as ``tool.shapegen``.

    Top-level tables of the source become sub-tables of the section, so
    ``[inference]`` turns into ``[tool.shapegen.inference]``. Comments and
    whitespace inside the tables are kept because the tomlkit items are
    re-used; the leading comment block is kept above the new section.

    Args:
        toml_doc (str): Original TOML document.
        section_keys (str): Dotted section path. Empty segments are ignored.

    Returns:
        str: The nested TOML document.

    Raises:
        ValueError: If ``section_keys`` has no non-empty segment.
        RuntimeError: If ``toml_doc`` is not valid TOML.
    """
    keys: list[str] = [k for k in section_keys.split(".") if k]
    if not keys:
        raise ValueError("section_keys must contain at least one non-empty component")

    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(toml_doc)
    except TomlkitParseError as exc:
        raise RuntimeError(f"Error parsing TOML document: {exc}") from exc

    new_doc: tomlkit.TOMLDocument = tomlkit.document()
    for key, item in doc.body:
        if key is not None:
            break
        new_doc.body.append((None, item))

    outer: Table = tomlkit.table(is_super_table=True)
    current: Table = outer
    for key in keys[1:]:
        inner: Table = tomlkit.table(is_super_table=True)
        current.add(key, inner)
        current = inner
    for key, item in doc.items():
        current.add(key, item)
    new_doc.add(keys[0], outer)
    return new_doc.as_string()
