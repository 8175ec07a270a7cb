# topmark:header:start
#
#   project      : ShapeGen
#   file         : diff.py
#   file_relpath : src/shapegen/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Colorized rendering of unified diffs for ``generate --diff``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Sequence


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): A unified diff, as lines or one multiline string.
        show_line_numbers (bool): Prefix each line with a 4-digit line number.

    Returns:
        str: The formatted diff; removals red, additions green, hunk headers cyan.
    """
    lines: list[str] = patch.splitlines() if isinstance(patch, str) else list(patch)

    def process_line(line: str) -> str:
        content: str = line.rstrip("\n").replace("\r", "\\r")
        if line.startswith(("---", "+++")):
            return chalk.bold(content)
        match line[:1]:
            case "-":
                return chalk.red(content)
            case "+":
                return chalk.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return content

    if show_line_numbers:
        return "".join(
            f"{chalk.gray(f'{i:04d}|')}{process_line(line)}\n" for i, line in enumerate(lines, 1)
        )
    return "".join(f"{process_line(line)}\n" for line in lines)
