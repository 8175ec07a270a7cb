# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_diff_render.py
#   file_relpath : tests/test_diff_render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for colored patch rendering."""

from __future__ import annotations

from shapegen.utils.diff import render_patch

PATCH = "--- a (current)\n+++ a (generated)\n@@ -0,0 +1 @@\n+data X = X {\n"


def test_render_patch_keeps_every_line() -> None:
    rendered = render_patch(PATCH)
    for line in PATCH.splitlines():
        assert line in rendered


def test_render_patch_accepts_line_sequences() -> None:
    rendered = render_patch(PATCH.splitlines(keepends=True))
    assert "+data X = X {" in rendered


def test_render_patch_line_numbers() -> None:
    rendered = render_patch(PATCH, show_line_numbers=True)
    assert "0001|" in rendered
    assert "0004|" in rendered
