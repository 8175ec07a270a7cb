# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `Config` / `MutableConfig`: parsing, merging, freezing."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from shapegen.config.model import (
    CLI_OVERRIDE_STR,
    Config,
    MutableConfig,
    is_valid_namespace,
    is_valid_type_name,
)
from shapegen.config.types import TypeNames
from tests.conftest import make_config


def _warnings(draft: MutableConfig) -> list[str]:
    return [d.message for d in draft.diagnostics]


def test_defaults_freeze_to_builtin_values() -> None:
    config: Config = MutableConfig.from_defaults().freeze()
    assert config.root_name == "Root"
    assert config.declare_root is True
    assert config.scalar_sequences is False
    assert config.type_names == TypeNames()
    assert config.namespace == "Generated"
    assert config.extension == "hs"
    assert config.output_dir == Path(".")
    assert config.config_files == ("<defaults>",)
    assert config.diagnostics == ()


def test_empty_builder_freezes() -> None:
    config = MutableConfig().freeze()
    assert config.root_name == "Root"
    assert config.type_names == TypeNames()


def test_from_toml_dict_reads_every_table(tmp_path: Path) -> None:
    data: dict[str, Any] = {
        "inference": {"root_name": "Repo", "declare_root": False, "scalar_sequences": True},
        "types": {"text": "Text", "bool": "Boolean"},
        "formatting": {"sample_comments": False},
        "output": {"namespace": "Data.GitHub", "extension": ".hs", "directory": "gen"},
    }
    cfg_file = tmp_path / "shapegen.toml"
    draft = MutableConfig.from_toml_dict(data, config_file=cfg_file)
    assert _warnings(draft) == []

    config = draft.freeze()
    assert config.root_name == "Repo"
    assert config.declare_root is False
    assert config.scalar_sequences is True
    assert config.type_names.text == "Text"
    assert config.type_names.boolean == "Boolean"
    assert config.type_names.number == "Double"
    assert config.type_names.sample_comments is False
    assert config.namespace == "Data.GitHub"
    assert config.extension == "hs"
    assert config.output_dir == tmp_path / "gen"


@pytest.mark.parametrize(
    "data, fragment",
    [
        ({"inference": {"root_name": "lower"}}, "root_name 'lower'"),
        ({"inference": {"root_name": 3}}, "must be a string"),
        ({"inference": {"declare_root": "yes"}}, "must be a boolean"),
        ({"types": {"text": "  "}}, "must not be empty"),
        ({"types": {"string": "Text"}}, "unknown key 'string'"),
        ({"output": {"namespace": "data.github"}}, "namespace 'data.github'"),
        ({"output": {"extension": "."}}, "extension"),
    ],
)
def test_invalid_values_become_warnings(data: dict[str, Any], fragment: str) -> None:
    draft = MutableConfig.from_toml_dict(data)
    messages = _warnings(draft)
    assert len(messages) == 1
    assert fragment in messages[0]
    # Invalid values are left unset so the lower layer stays in effect.
    assert draft.freeze() == MutableConfig(diagnostics=draft.diagnostics).freeze()


def test_empty_namespace_is_allowed() -> None:
    draft = MutableConfig.from_toml_dict({"output": {"namespace": ""}})
    assert _warnings(draft) == []
    assert draft.freeze().namespace == ""


def test_merge_last_wins_and_types_merge_by_key() -> None:
    base = MutableConfig.from_toml_dict({"types": {"text": "Text", "number": "Int"}})
    top = MutableConfig.from_toml_dict(
        {"inference": {"root_name": "Top"}, "types": {"number": "Scientific"}}
    )
    merged = base.merge_with(top).freeze()
    assert merged.root_name == "Top"
    assert merged.type_names.text == "Text"
    assert merged.type_names.number == "Scientific"


def test_merge_keeps_lower_value_when_unset() -> None:
    base = MutableConfig.from_toml_dict({"inference": {"root_name": "Base"}})
    top = MutableConfig.from_toml_dict({"output": {"namespace": "N"}})
    merged = base.merge_with(top).freeze()
    assert merged.root_name == "Base"
    assert merged.namespace == "N"


def test_merge_concatenates_provenance_and_diagnostics() -> None:
    base = MutableConfig.from_defaults()
    top = MutableConfig.from_toml_dict({"types": {"bogus": "X"}})
    top.config_files = [Path("extra.toml")]
    merged = base.merge_with(top)
    assert merged.config_files == ["<defaults>", Path("extra.toml")]
    assert len(merged.diagnostics) == 1


def test_thaw_freeze_round_trip() -> None:
    config = make_config(root_name="Repo", type_overrides={"text": "Text"}, sample_comments=False)
    assert config.thaw().freeze() == config


def test_apply_cli_args_overrides() -> None:
    draft = MutableConfig.from_defaults().apply_cli_args(
        {
            "root_name": "Doc",
            "declare_root": False,
            "scalar_sequences": True,
            "sample_comments": False,
            "namespace": "Data.X",
            "apply_changes": True,
            "verbosity_level": 1,
            "extension": ".lhs",
        }
    )
    config = draft.freeze()
    assert config.root_name == "Doc"
    assert config.declare_root is False
    assert config.scalar_sequences is True
    assert config.type_names.sample_comments is False
    assert config.namespace == "Data.X"
    assert config.apply_changes is True
    assert config.verbosity_level == 1
    assert config.extension == "lhs"
    assert config.config_files[-1] == CLI_OVERRIDE_STR


def test_apply_cli_args_ignores_none_and_invalid_names() -> None:
    draft = MutableConfig.from_defaults().apply_cli_args(
        {"root_name": "bad name", "namespace": None, "declare_root": None}
    )
    config = draft.freeze()
    assert config.root_name == "Root"
    assert config.namespace == "Generated"
    assert config.declare_root is True
    assert any("--root-name" in d.message for d in config.diagnostics)


def test_apply_cli_args_output_dir_is_resolved(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = MutableConfig.from_defaults().apply_cli_args({"output_dir": "out"}).freeze()
    assert config.output_dir == (tmp_path / "out").resolve()


def test_to_toml_dict_mirrors_default_tables() -> None:
    data = make_config().to_toml_dict()
    assert set(data) == {"inference", "types", "formatting", "output"}
    assert data["types"] == {
        "text": "BS.ByteString",
        "number": "Double",
        "bool": "Bool",
        "null": "Maybe a",
        "unknown": "UNKNOWN",
    }
    assert data["output"]["directory"] == "."


def test_to_toml_dict_reloads_to_the_same_config() -> None:
    config = make_config(root_name="Repo", namespace="")
    reloaded = MutableConfig.from_toml_dict(config.to_toml_dict()).freeze()
    assert reloaded.root_name == "Repo"
    assert reloaded.namespace == ""
    assert reloaded.type_names == config.type_names


@pytest.mark.parametrize(
    "name, valid",
    [("Root", True), ("Root_2", True), ("Root'", True), ("root", False), ("", False), ("A.B", False)],
)
def test_is_valid_type_name(name: str, valid: bool) -> None:
    assert is_valid_type_name(name) is valid


@pytest.mark.parametrize(
    "namespace, valid",
    [("", True), ("Data", True), ("Data.FreeAgent", True), ("Data.", False), ("data.X", False)],
)
def test_is_valid_namespace(namespace: str, valid: bool) -> None:
    assert is_valid_namespace(namespace) is valid
