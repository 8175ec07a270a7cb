# topmark:header:start
#
#   project      : ShapeGen
#   file         : types.py
#   file_relpath : src/shapegen/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight config types and aliases.

This module hosts stable, import-friendly definitions that other modules can
depend on without risk of circular imports.

Exports:
    - `ArgsLike`: structural mapping type for CLI/API argument dicts.
    - `TypeNames`: target-language names used to render resolved field types.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

# Generic mapping accepted by config loaders (Click parameters or API dicts).
ArgsLike = Mapping[str, Any]


@dataclass(frozen=True)
class TypeNames:
    """Type expressions used when rendering resolved field types.

    Attributes:
        text (str): Type for JSON strings.
        number (str): Type for JSON numbers.
        boolean (str): Type for JSON booleans.
        null (str): Placeholder for ``null`` (no type information).
        unknown (str): Placeholder for unresolved shapes.
        sample_comments (bool): Append the sample string as a trailing comment
            after text-typed fields.
    """

    text: str = "BS.ByteString"
    number: str = "Double"
    boolean: str = "Bool"
    null: str = "Maybe a"
    unknown: str = "UNKNOWN"
    sample_comments: bool = True

    @classmethod
    def type_keys(cls) -> tuple[str, ...]:
        """Names of the string-valued attributes (the ``[types]`` table keys)."""
        return tuple(f.name for f in fields(cls) if f.name != "sample_comments")
