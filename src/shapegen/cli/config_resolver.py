# topmark:header:start
#
#   project      : ShapeGen
#   file         : config_resolver.py
#   file_relpath : src/shapegen/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the ShapeGen configuration from Click parameters.

Bridges CLI parsing and `shapegen.config.model`: builds an `ArgsNamespace`,
merges the configuration layers and applies the CLI overrides last.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import toml

from shapegen.cli.cli_types import build_args_namespace
from shapegen.cli.errors import ShapegenConfigError
from shapegen.config.logging import get_logger
from shapegen.config.model import MutableConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shapegen.cli.cli_types import ArgsNamespace
    from shapegen.config.logging import ShapegenLogger

logger: ShapegenLogger = get_logger(__name__)


def check_explicit_config_files(config_paths: Sequence[str]) -> list[Path]:
    """Return ``config_paths`` as paths after checking they exist and parse.

    Raises:
        ShapegenConfigError: If a file is missing or is not valid TOML.
    """
    checked: list[Path] = []
    for entry in config_paths:
        path = Path(entry)
        if not path.is_file():
            raise ShapegenConfigError(f"Config file not found: {path}")
        try:
            toml.load(path)
        except toml.TomlDecodeError as exc:
            raise ShapegenConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        except OSError as exc:
            raise ShapegenConfigError(f"Cannot read config file {path}: {exc}") from exc
        checked.append(path)
    return checked


def resolve_config_from_click(
    *,
    anchor: Path | None,
    no_config: bool,
    config_paths: Sequence[str],
    verbosity_level: int | None = None,
    apply_changes: bool | None = None,
    root_name: str | None = None,
    no_root: bool = False,
    scalar_sequences: bool | None = None,
    sample_comments: bool | None = None,
    namespace: str | None = None,
    output_dir: str | None = None,
) -> MutableConfig:
    """Build the merged configuration draft for a command.

    Resolution order (lowest → highest precedence):
      1. Packaged defaults (``shapegen-default.toml``).
      2. Project configs discovered upward from ``anchor`` (or the CWD),
         unless ``no_config`` is set.
      3. Explicit ``--config`` files, in order.
      4. CLI overrides.

    Args:
        anchor (Path | None): Input document path; its directory anchors discovery.
        no_config (bool): Skip project config discovery.
        config_paths (Sequence[str]): Explicit config files.
        verbosity_level (int | None): Program-output verbosity.
        apply_changes (bool | None): Whether ``generate`` writes files.
        root_name (str | None): Override for the top-level record name.
        no_root (bool): Do not declare the top-level document.
        scalar_sequences (bool | None): Element policy override.
        sample_comments (bool | None): Sample comment override.
        namespace (str | None): Module namespace override.
        output_dir (str | None): Output directory override (relative to the CWD).

    Returns:
        MutableConfig: The merged draft; call `freeze` for the runtime `Config`.

    Raises:
        ShapegenConfigError: If an explicit config file is missing or invalid.
    """
    args: ArgsNamespace = build_args_namespace(
        verbosity_level=verbosity_level,
        apply_changes=apply_changes,
        root_name=root_name,
        no_root=no_root,
        scalar_sequences=scalar_sequences,
        sample_comments=sample_comments,
        namespace=namespace,
        output_dir=output_dir,
    )
    logger.trace("ArgsNamespace: %s", args)

    explicit: list[Path] = check_explicit_config_files(config_paths)
    draft: MutableConfig = MutableConfig.load_merged(
        anchor=anchor,
        extra_config_files=explicit,
        no_config=no_config,
    )
    logger.debug("Config sources: %s", draft.config_files)
    return draft.apply_cli_args(args)
