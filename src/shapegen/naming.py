# topmark:header:start
#
#   project      : ShapeGen
#   file         : naming.py
#   file_relpath : src/shapegen/naming.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identifier and module-name helpers for ShapeGen.

All functions in this module are pure string transforms. They turn JSON keys
into Haskell type names and documentation paths into module names and file
paths.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

DEFAULT_EXTENSION: str = "hs"


def pascal_case(text: str) -> str:
    """Convert an underscore-delimited identifier to PascalCase.

    Each non-empty segment gets its first character uppercased; the rest of
    the segment is kept as is. Empty segments (leading, trailing or repeated
    underscores) are skipped.

    Args:
        text (str): The identifier to convert (e.g. ``"user_id"``).

    Returns:
        str: The PascalCase identifier (e.g. ``"UserId"``).
    """
    return "".join(segment[0].upper() + segment[1:] for segment in text.split("_") if segment)


def singularize(text: str) -> str:
    """Drop a single trailing ``s``; no irregular plurals."""
    if text.endswith("s"):
        return text[:-1]
    return text


def path_to_module_name(prefix: str, path: str) -> str:
    """Map a documentation path to a dotted module name.

    The path is split into its components (a leading ``/`` counts as a
    component), the first component is dropped, and every remaining component
    is PascalCased and appended to ``prefix``.

    Args:
        prefix (str): Namespace prefix, e.g. ``"Data.FreeAgent"``. May be empty.
        path (str): Path-like string, e.g. ``"/docs/invoices"``.

    Returns:
        str: The module name, e.g. ``"Data.FreeAgent.Docs.Invoices"``.
    """
    parts: list[str] = [pascal_case(part) for part in PurePosixPath(path).parts[1:]]
    segments: list[str] = [prefix] if prefix else []
    segments.extend(part for part in parts if part)
    return ".".join(segments)


def url_to_module_name(prefix: str, url: str) -> str:
    """Map a documentation URL to a module name using its path component."""
    return path_to_module_name(prefix, urlparse(url).path)


def module_name_to_file_path(name: str, extension: str = DEFAULT_EXTENSION) -> Path:
    """Return the relative source path for a dotted module name.

    Args:
        name (str): Dotted module name, e.g. ``"Data.FreeAgent.Invoices"``.
        extension (str): File extension without the leading dot.

    Returns:
        Path: Relative path, e.g. ``Data/FreeAgent/Invoices.hs``.
    """
    segments: list[str] = name.split(".")
    segments[-1] = f"{segments[-1]}.{extension.lstrip('.')}"
    return Path(*segments)
