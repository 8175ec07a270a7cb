# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_writer.py
#   file_relpath : tests/output/test_writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for generated-module sinks and diffs."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from shapegen.output.model import GeneratedModule, WriteStatus, unified_diff, would_change
from shapegen.output.writer import (
    FileSystemSink,
    NullSink,
    StdoutSink,
    select_sink,
    write_module,
)
from tests.conftest import make_config

TEXT = "module A.B\n  where\n"

posix_only = pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")


@pytest.fixture
def module(tmp_path: Path) -> GeneratedModule:
    return GeneratedModule.build("A.B", TEXT, output_dir=tmp_path, extension="hs")


def test_build_places_module_under_output_dir(tmp_path: Path, module: GeneratedModule) -> None:
    assert module.path == tmp_path / "A" / "B.hs"
    assert module.existing_text() is None
    assert would_change(module)


def test_filesystem_sink_writes_and_creates_parents(module: GeneratedModule) -> None:
    result = FileSystemSink().write(module)
    assert result.status == WriteStatus.WRITTEN
    assert result.bytes_written == len(TEXT.encode("utf-8"))
    assert module.path.read_text(encoding="utf-8") == TEXT
    assert not any(p.name.endswith(".tmp") for p in module.path.parent.iterdir())


def test_filesystem_sink_is_idempotent(module: GeneratedModule) -> None:
    FileSystemSink().write(module)
    again = FileSystemSink().write(module)
    assert again.status == WriteStatus.UNCHANGED
    assert again.bytes_written == 0


def test_filesystem_sink_replaces_stale_content(module: GeneratedModule) -> None:
    module.path.parent.mkdir(parents=True)
    module.path.write_text("old\n", encoding="utf-8")
    assert FileSystemSink().write(module).status == WriteStatus.WRITTEN
    assert module.path.read_text(encoding="utf-8") == TEXT


@posix_only
def test_filesystem_sink_new_file_follows_umask(module: GeneratedModule) -> None:
    previous: int = os.umask(0o022)
    try:
        FileSystemSink().write(module)
    finally:
        os.umask(previous)
    assert stat.S_IMODE(module.path.stat().st_mode) == 0o644


@posix_only
def test_filesystem_sink_keeps_existing_mode(module: GeneratedModule) -> None:
    module.path.parent.mkdir(parents=True)
    module.path.write_text("old\n", encoding="utf-8")
    module.path.chmod(0o640)
    FileSystemSink().write(module)
    assert module.path.read_text(encoding="utf-8") == TEXT
    assert stat.S_IMODE(module.path.stat().st_mode) == 0o640


def test_existing_text_rejects_non_utf8_target(module: GeneratedModule) -> None:
    module.path.parent.mkdir(parents=True)
    module.path.write_bytes(b"\xff\xfe")
    with pytest.raises(UnicodeDecodeError):
        would_change(module)


def test_null_sink_never_writes(module: GeneratedModule) -> None:
    assert NullSink().write(module).status == WriteStatus.WOULD_WRITE
    assert not module.path.exists()
    FileSystemSink().write(module)
    assert NullSink().write(module).status == WriteStatus.UNCHANGED


def test_stdout_sink_prints(module: GeneratedModule, capsys: pytest.CaptureFixture[str]) -> None:
    result = StdoutSink().write(module)
    assert result.status == WriteStatus.WRITTEN
    assert capsys.readouterr().out == TEXT


def test_stdout_sink_skips_empty_module(tmp_path: Path) -> None:
    empty = GeneratedModule.build("E", "", output_dir=tmp_path, extension="hs")
    assert StdoutSink().write(empty).status == WriteStatus.SKIPPED


def test_select_sink() -> None:
    assert isinstance(select_sink(make_config()), NullSink)
    assert isinstance(select_sink(make_config(apply_changes=True)), FileSystemSink)
    assert isinstance(select_sink(make_config(apply_changes=True), to_stdout=True), StdoutSink)


def test_write_module_returns_sink_result(module: GeneratedModule) -> None:
    assert write_module(module, FileSystemSink()).status == WriteStatus.WRITTEN


def test_unified_diff(module: GeneratedModule) -> None:
    patch = unified_diff(module)
    assert "(current)" in patch and "(generated)" in patch
    assert "+module A.B" in patch

    FileSystemSink().write(module)
    assert unified_diff(module) == ""


def test_status_colors_wrap_text() -> None:
    for status in WriteStatus:
        assert "x" in status.color("x")
