# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_cli_exit_codes.py
#   file_relpath : tests/cli/test_cli_exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: error conditions map to their exit codes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from shapegen.cli.exit_codes import ExitCode
from tests.cli.conftest import assert_exit_code, assert_USAGE_ERROR, run_cli_in
from tests.conftest import SAMPLE_DOCUMENT, mark_cli, write_json

if TYPE_CHECKING:
    from pathlib import Path


@mark_cli
@pytest.mark.parametrize("command", ["infer", "generate"])
def test_missing_input_file(tmp_path: Path, command: str) -> None:
    result = run_cli_in(tmp_path, ["--no-color", command, "--no-config", "nope.json"])
    assert_exit_code(result, ExitCode.FILE_NOT_FOUND)
    assert "No such file: nope.json" in result.stderr


@mark_cli
def test_invalid_json_input(tmp_path: Path) -> None:
    (tmp_path / "bad.json").write_text('{"id": 1,', encoding="utf-8")
    result = run_cli_in(tmp_path, ["--no-color", "infer", "--no-config", "bad.json"])
    assert_exit_code(result, ExitCode.INPUT_ERROR)
    assert "invalid JSON" in result.stderr


@mark_cli
def test_invalid_json_on_stdin(tmp_path: Path) -> None:
    result = run_cli_in(
        tmp_path, ["--no-color", "infer", "--no-config", "-"], input_text="not json"
    )
    assert_exit_code(result, ExitCode.INPUT_ERROR)
    assert "<stdin>" in result.stderr


@mark_cli
def test_missing_explicit_config(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(
        tmp_path, ["--no-color", "infer", "--config", "missing.toml", "sample.json"]
    )
    assert_exit_code(result, ExitCode.CONFIG_ERROR)
    assert "Config file not found" in result.stderr


@mark_cli
def test_malformed_explicit_config(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    (tmp_path / "broken.toml").write_text("[inference\n", encoding="utf-8")
    result = run_cli_in(
        tmp_path, ["--no-color", "infer", "--config", "broken.toml", "sample.json"]
    )
    assert_exit_code(result, ExitCode.CONFIG_ERROR)
    assert "Invalid TOML" in result.stderr


@mark_cli
def test_verbose_and_quiet_are_exclusive(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["-v", "-q", "version"])
    assert_USAGE_ERROR(result)


@mark_cli
def test_unwritable_output_is_an_io_error(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    # A regular file where the module directory should be created.
    (tmp_path / "out").write_text("", encoding="utf-8")
    result = run_cli_in(
        tmp_path,
        ["--no-color", "generate", "--no-config", "--apply", "--module", "out.Sample", "sample.json"],
    )
    assert_exit_code(result, ExitCode.IO_ERROR)
    assert "Cannot write" in result.stderr


@mark_cli
@pytest.mark.parametrize("extra", [[], ["--apply"], ["--diff"]])
def test_non_utf8_target_is_an_io_error(tmp_path: Path, extra: list[str]) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    target = tmp_path / "Generated" / "Sample.hs"
    target.parent.mkdir()
    target.write_bytes(b"\xff\xfe")
    result = run_cli_in(tmp_path, ["--no-color", "generate", "--no-config", *extra, "sample.json"])
    assert_exit_code(result, ExitCode.IO_ERROR)
    assert "as UTF-8" in result.stderr
    assert target.read_bytes() == b"\xff\xfe"
