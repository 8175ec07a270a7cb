# topmark:header:start
#
#   project      : ShapeGen
#   file         : model.py
#   file_relpath : src/shapegen/output/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generated module value objects and write statuses."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from shapegen.naming import module_name_to_file_path

if TYPE_CHECKING:
    from collections.abc import Callable


class WriteStatus(Enum):
    """Outcome of handing a generated module to a sink."""

    WRITTEN = "written"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    WOULD_WRITE = "would write"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` colorizer used for this status in human output."""
        return cast(
            "Callable[[str], str]",
            {
                WriteStatus.WRITTEN: chalk.green,
                WriteStatus.UNCHANGED: chalk.gray,
                WriteStatus.SKIPPED: chalk.yellow,
                WriteStatus.WOULD_WRITE: chalk.yellow_bright,
            }[self],
        )


@dataclass(frozen=True)
class WriteResult:
    """Structured result of a write operation."""

    status: WriteStatus
    bytes_written: int = 0


@dataclass(frozen=True)
class GeneratedModule:
    """A rendered source module together with its target path.

    Attributes:
        module_name (str): Dotted module name, e.g. ``Generated.Docs.Invoices``.
        path (Path): Target file (output directory + module path + extension).
        text (str): Complete module source.
    """

    module_name: str
    path: Path
    text: str

    @classmethod
    def build(
        cls, module_name: str, text: str, *, output_dir: Path, extension: str
    ) -> GeneratedModule:
        """Place ``module_name`` under ``output_dir`` with the given file extension."""
        return cls(
            module_name=module_name,
            path=output_dir / module_name_to_file_path(module_name, extension),
            text=text,
        )

    def existing_text(self) -> str | None:
        """Return the current content of the target file, or None if it does not exist.

        Raises:
            UnicodeDecodeError: If the target file is not valid UTF-8.
        """
        if not self.path.is_file():
            return None
        return self.path.read_text(encoding="utf-8")


def would_change(module: GeneratedModule) -> bool:
    """Return True if writing ``module`` would create or modify its target file."""
    return module.existing_text() != module.text


def unified_diff(module: GeneratedModule) -> str:
    """Return a unified diff from the current target file to the generated text.

    A missing target diffs against an empty file. The result is empty when
    nothing would change.
    """
    current: str = module.existing_text() or ""
    lines = difflib.unified_diff(
        current.splitlines(keepends=True),
        module.text.splitlines(keepends=True),
        fromfile=f"{module.path} (current)",
        tofile=f"{module.path} (generated)",
    )
    return "".join(lines)
