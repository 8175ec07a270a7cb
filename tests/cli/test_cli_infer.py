# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_cli_infer.py
#   file_relpath : tests/cli/test_cli_infer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the `infer` command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from tests.cli.conftest import assert_SUCCESS, run_cli_in
from tests.conftest import SAMPLE_DECLARATIONS, SAMPLE_DOCUMENT, mark_cli, write_json

if TYPE_CHECKING:
    from pathlib import Path


@mark_cli
def test_infer_prints_declarations(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(tmp_path, ["--no-color", "infer", "--no-config", "sample.json"])
    assert_SUCCESS(result)
    assert result.stdout == SAMPLE_DECLARATIONS


@mark_cli
def test_infer_reports_diagnostics_on_stderr(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(tmp_path, ["--no-color", "infer", "--no-config", "sample.json"])
    assert_SUCCESS(result)
    assert "warning: Unresolved element type for alias 'Tags'" in result.stderr
    assert "warning: Unresolved type for field Root.tags" in result.stderr
    assert "warning:" not in result.stdout


@mark_cli
def test_quiet_suppresses_diagnostics(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(tmp_path, ["--no-color", "-q", "infer", "--no-config", "sample.json"])
    assert_SUCCESS(result)
    assert result.stderr == ""
    assert result.stdout == SAMPLE_DECLARATIONS


@mark_cli
def test_verbose_prints_banner(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(tmp_path, ["--no-color", "-v", "infer", "--no-config", "sample.json"])
    assert_SUCCESS(result)
    assert result.stdout.startswith("-- inferred from sample.json\n")


@mark_cli
def test_infer_from_stdin(tmp_path: Path) -> None:
    result = run_cli_in(
        tmp_path,
        ["--no-color", "infer", "--no-config", "-"],
        input_text=json.dumps(SAMPLE_DOCUMENT),
    )
    assert_SUCCESS(result)
    assert result.stdout == SAMPLE_DECLARATIONS


@mark_cli
def test_infer_inference_flags(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(
        tmp_path,
        [
            "--no-color",
            "infer",
            "--no-config",
            "--root-name",
            "Repo",
            "--scalar-sequences",
            "--no-sample-comments",
            "sample.json",
        ],
    )
    assert_SUCCESS(result)
    assert "type Tags = [ BS.ByteString ]\n" in result.stdout
    assert "data Repo = Repo {" in result.stdout
    assert "  , _name :: BS.ByteString\n" in result.stdout
    assert result.stderr == ""


@mark_cli
def test_infer_no_root(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(
        tmp_path, ["--no-color", "infer", "--no-config", "--no-root", "sample.json"]
    )
    assert_SUCCESS(result)
    assert "data Root" not in result.stdout
    assert "data Owner = Owner {" in result.stdout


@mark_cli
def test_infer_json_format(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(tmp_path, ["infer", "--no-config", "--format", "json", "sample.json"])
    assert_SUCCESS(result)
    payload = json.loads(result.stdout)
    assert payload["record_names"] == ["Owner", "Root"]
    assert payload["diagnostic_counts"]["warning"] == 2
    assert "\x1b[" not in result.stdout


@mark_cli
def test_infer_markdown_format(tmp_path: Path) -> None:
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(
        tmp_path, ["--no-color", "infer", "--no-config", "--format", "markdown", "sample.json"]
    )
    assert_SUCCESS(result)
    assert result.stdout.startswith("# Inferred declarations\n")
    assert "```haskell\n" in result.stdout


@mark_cli
def test_infer_uses_discovered_config(tmp_path: Path) -> None:
    (tmp_path / "shapegen.toml").write_text(
        'root = true\n[inference]\nroot_name = "Doc"\n[types]\nnumber = "Int"\n',
        encoding="utf-8",
    )
    write_json(tmp_path / "data" / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(tmp_path, ["--no-color", "infer", "data/sample.json"])
    assert_SUCCESS(result)
    assert "data Doc = Doc {" in result.stdout
    assert "    _id   :: Int\n" in result.stdout


@mark_cli
def test_infer_explicit_config_file(tmp_path: Path) -> None:
    (tmp_path / "custom.toml").write_text('[types]\ntext = "Text"\n', encoding="utf-8")
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(
        tmp_path,
        ["--no-color", "infer", "--no-config", "--config", "custom.toml", "sample.json"],
    )
    assert_SUCCESS(result)
    assert "  , _name :: Text -- x\n" in result.stdout


@mark_cli
def test_invalid_config_value_is_reported_not_fatal(tmp_path: Path) -> None:
    (tmp_path / "custom.toml").write_text('[inference]\nroot_name = "lower"\n', encoding="utf-8")
    write_json(tmp_path / "sample.json", SAMPLE_DOCUMENT)
    result = run_cli_in(
        tmp_path,
        ["--no-color", "infer", "--no-config", "-c", "custom.toml", "sample.json"],
    )
    assert_SUCCESS(result)
    assert "root_name 'lower' is not a valid type name" in result.stderr
    assert "data Root = Root {" in result.stdout
