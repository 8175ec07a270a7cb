# topmark:header:start
#
#   project      : ShapeGen
#   file         : formats.py
#   file_relpath : src/shapegen/rendering/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output formats for CLI rendering.

Members:
  DEFAULT: Human-friendly text: the generated Haskell declarations.
  JSON: A single JSON document describing the inferred schema.
  MARKDOWN: A summary table followed by fenced Haskell blocks.

Machine formats (``JSON``) never include ANSI color.
"""

from enum import Enum


class OutputFormat(str, Enum):
    """Output format selected with ``--format``."""

    DEFAULT = "default"
    JSON = "json"
    MARKDOWN = "markdown"

    @property
    def is_machine(self) -> bool:
        """True for machine-readable formats."""
        return self is OutputFormat.JSON
