# topmark:header:start
#
#   project      : ShapeGen
#   file         : model.py
#   file_relpath : src/shapegen/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used by the inference pipeline,
      the renderers and the output writer.
    - `MutableConfig`: a mutable builder used during discovery and merging; it
      can be frozen into `Config` and thawed back for edits.

Layering (lowest → highest precedence):
    1. The packaged ``shapegen-default.toml``.
    2. Project files discovered upward from the input document
       (``pyproject.toml`` with ``[tool.shapegen]``, then ``shapegen.toml``).
    3. Explicit ``--config`` files, in the order given.
    4. CLI / API overrides (`MutableConfig.apply_cli_args`).

Values left as ``None`` on a builder mean "not set here" and never override a
lower layer. Invalid values are reported in ``diagnostics`` and ignored, so
the value from the previous layer stays in effect.

Path semantics:
    - ``[output] directory`` declared in a config file is resolved against that
      file's directory.
    - ``--output-dir`` on the command line is resolved against the CWD.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from shapegen.config.io import (
    get_bool_value_or_none,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_defaults_text,
    load_toml_dict,
)
from shapegen.config.logging import get_logger
from shapegen.config.types import TypeNames
from shapegen.constants import PYPROJECT_TOML_NAME, SHAPEGEN_TOML_NAME
from shapegen.diagnostic import Diagnostic, DiagnosticLog

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shapegen.config.io import TomlTable
    from shapegen.config.logging import ShapegenLogger
    from shapegen.config.types import ArgsLike

logger: ShapegenLogger = get_logger(__name__)

# Haskell type constructor: uppercase letter, then identifier characters.
TYPE_NAME_RE: re.Pattern[str] = re.compile(r"^[A-Z][A-Za-z0-9_']*$")

# Marker recorded in ``config_files`` when CLI/API overrides are applied.
CLI_OVERRIDE_STR = "<CLI overrides>"

# `[types]` table key → `TypeNames` attribute (``bool`` would shadow the builtin).
TYPE_KEY_TO_ATTR: dict[str, str] = {
    "text": "text",
    "number": "number",
    "bool": "boolean",
    "null": "null",
    "unknown": "unknown",
}


def is_valid_type_name(name: str) -> bool:
    """Return True if ``name`` is usable as a Haskell type constructor."""
    return bool(TYPE_NAME_RE.match(name))


def is_valid_namespace(namespace: str) -> bool:
    """Return True for an empty namespace or dot-separated type constructors."""
    if namespace == "":
        return True
    return all(is_valid_type_name(part) for part in namespace.split("."))


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for ShapeGen.

    Attributes:
        verbosity_level (int | None): None = inherit, 0 = terse, 1+ = verbose.
        apply_changes (bool | None): Whether `generate` writes files (True) or
            previews only (False / None).
        root_name (str): Name of the record declared for the top-level document.
        declare_root (bool): Whether the top-level document is declared at all.
        scalar_sequences (bool): Whether arrays of scalars resolve to a list
            of the scalar type (instead of the unknown placeholder).
        type_names (TypeNames): Type expressions used by the renderer.
        namespace (str): Module namespace prefix (may be empty).
        extension (str): Extension of generated source files (no leading dot).
        output_dir (Path): Directory receiving generated module trees.
        config_files (tuple[Path | str, ...]): Config sources that were merged.
        diagnostics (tuple[Diagnostic, ...]): Problems found while loading config.
    """

    verbosity_level: int | None
    apply_changes: bool | None

    # Inference
    root_name: str
    declare_root: bool
    scalar_sequences: bool

    # Rendering
    type_names: TypeNames

    # Output
    namespace: str
    extension: str
    output_dir: Path

    # Provenance
    config_files: tuple[Path | str, ...]
    diagnostics: tuple[Diagnostic, ...]

    def to_toml_dict(self) -> TomlTable:
        """Convert this Config into a TOML-serializable dict (same tables as the defaults)."""
        return {
            "inference": {
                "root_name": self.root_name,
                "declare_root": self.declare_root,
                "scalar_sequences": self.scalar_sequences,
            },
            "types": {
                key: getattr(self.type_names, attr) for key, attr in TYPE_KEY_TO_ATTR.items()
            },
            "formatting": {"sample_comments": self.type_names.sample_comments},
            "output": {
                "namespace": self.namespace,
                "extension": self.extension,
                "directory": str(self.output_dir),
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            verbosity_level=self.verbosity_level,
            apply_changes=self.apply_changes,
            root_name=self.root_name,
            declare_root=self.declare_root,
            scalar_sequences=self.scalar_sequences,
            type_overrides={
                attr: getattr(self.type_names, attr) for attr in TypeNames.type_keys()
            },
            sample_comments=self.type_names.sample_comments,
            namespace=self.namespace,
            extension=self.extension,
            output_dir=self.output_dir,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Every scalar field is tri-state: ``None`` means "not set by this layer".
    ``type_overrides`` maps `TypeNames` attribute names to type expressions and
    is merged key by key.
    """

    verbosity_level: int | None = None
    apply_changes: bool | None = None

    root_name: str | None = None
    declare_root: bool | None = None
    scalar_sequences: bool | None = None

    type_overrides: dict[str, str] = field(default_factory=lambda: {})
    sample_comments: bool | None = None

    namespace: str | None = None
    extension: str | None = None
    output_dir: Path | None = None

    config_files: list[Path | str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`.

        Unset fields fall back to the built-in `TypeNames` / inference defaults,
        so a builder that never saw the packaged defaults still freezes.
        """
        base_names = TypeNames()
        type_names: TypeNames = replace(
            base_names,
            sample_comments=(
                self.sample_comments
                if self.sample_comments is not None
                else base_names.sample_comments
            ),
            **self.type_overrides,
        )
        return Config(
            verbosity_level=self.verbosity_level,
            apply_changes=self.apply_changes,
            root_name=self.root_name if self.root_name is not None else "Root",
            declare_root=self.declare_root if self.declare_root is not None else True,
            scalar_sequences=bool(self.scalar_sequences),
            type_names=type_names,
            namespace=self.namespace if self.namespace is not None else "Generated",
            extension=self.extension if self.extension is not None else "hs",
            output_dir=self.output_dir if self.output_dir is not None else Path("."),
            config_files=tuple(self.config_files),
            diagnostics=self.diagnostics.freeze(),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    @functools.cache
    def get_default_config_toml(cls) -> str:
        """Return the packaged default configuration as TOML text, comments included."""
        return load_defaults_text()

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Load the packaged ``shapegen-default.toml``."""
        draft: MutableConfig = cls.from_toml_dict(load_defaults_dict(), config_file=None)
        draft.config_files = ["<defaults>"]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a ``shapegen.toml`` or ``pyproject.toml`` file.

        For ``pyproject.toml`` only the ``[tool.shapegen]`` table is read.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The parsed draft, or None when a pyproject
                file has no ``[tool.shapegen]`` table.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool_section: TomlTable = get_table_value(get_table_value(toml_data, "tool"), "shapegen")
            if not tool_section:
                logger.debug("No [tool.shapegen] section in %s", path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data, config_file=path)
        draft.config_files = [path]
        logger.trace("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Unknown tables are ignored. Values with the wrong type or an invalid
        identifier are reported as warnings and left unset.

        Args:
            data (TomlTable): Parsed TOML data (already unwrapped from ``[tool.shapegen]``).
            config_file (Path | None): Source file, used for diagnostics and to
                resolve a relative ``[output] directory``.

        Returns:
            MutableConfig: The resulting draft.
        """
        draft = cls()
        source: str = str(config_file) if config_file is not None else "<defaults>"

        def _string(table: TomlTable, section: str, key: str) -> str | None:
            if key not in table:
                return None
            value: Any = table[key]
            if not isinstance(value, str):
                draft.diagnostics.add_warning(
                    f"{source}: [{section}] {key} must be a string, got {type(value).__name__}"
                )
                return None
            return value

        def _flag(table: TomlTable, section: str, key: str) -> bool | None:
            if key not in table:
                return None
            value: bool | None = get_bool_value_or_none(table, key)
            if value is None:
                draft.diagnostics.add_warning(
                    f"{source}: [{section}] {key} must be a boolean, got {table[key]!r}"
                )
            return value

        inference: TomlTable = get_table_value(data, "inference")
        root_name: str | None = _string(inference, "inference", "root_name")
        if root_name is not None:
            if is_valid_type_name(root_name):
                draft.root_name = root_name
            else:
                draft.diagnostics.add_warning(
                    f"{source}: [inference] root_name {root_name!r} is not a valid type name"
                )
        draft.declare_root = _flag(inference, "inference", "declare_root")
        draft.scalar_sequences = _flag(inference, "inference", "scalar_sequences")

        types_tbl: TomlTable = get_table_value(data, "types")
        for key, attr in TYPE_KEY_TO_ATTR.items():
            value: str | None = _string(types_tbl, "types", key)
            if value is None:
                continue
            if not value.strip():
                draft.diagnostics.add_warning(f"{source}: [types] {key} must not be empty")
                continue
            draft.type_overrides[attr] = value
        for key in types_tbl:
            if key not in TYPE_KEY_TO_ATTR:
                draft.diagnostics.add_warning(f"{source}: [types] unknown key {key!r} ignored")

        formatting: TomlTable = get_table_value(data, "formatting")
        draft.sample_comments = _flag(formatting, "formatting", "sample_comments")

        output: TomlTable = get_table_value(data, "output")
        namespace: str | None = _string(output, "output", "namespace")
        if namespace is not None:
            if is_valid_namespace(namespace):
                draft.namespace = namespace
            else:
                draft.diagnostics.add_warning(
                    f"{source}: [output] namespace {namespace!r} is not a dotted module prefix"
                )
        extension: str | None = get_string_value_or_none(output, "extension")
        if extension is not None:
            extension = extension.lstrip(".")
            if extension and "/" not in extension:
                draft.extension = extension
            else:
                draft.diagnostics.add_warning(
                    f"{source}: [output] extension {output['extension']!r} is invalid"
                )
        directory: str | None = _string(output, "output", "directory")
        if directory is not None:
            out_path = Path(directory)
            if config_file is not None and not out_path.is_absolute():
                out_path = config_file.parent / out_path
            draft.output_dir = out_path

        for diag in draft.diagnostics:
            logger.warning("%s", diag.message)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found by walking upward from ``start``.

        Files are returned root-most first so that a later merge lets the
        nearest file win. Within one directory ``pyproject.toml`` comes before
        ``shapegen.toml``. A file declaring ``root = true`` stops the walk after
        its directory.

        Args:
            start (Path): File or directory where discovery starts.

        Returns:
            list[Path]: Discovered config paths, ordered for merging.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            stop_here = False
            dir_entries: list[Path] = []
            for name in (PYPROJECT_TOML_NAME, SHAPEGEN_TOML_NAME):
                candidate: Path = cur / name
                if not candidate.is_file():
                    continue
                data: TomlTable = load_toml_dict(candidate)
                if name == PYPROJECT_TOML_NAME:
                    data = get_table_value(get_table_value(data, "tool"), "shapegen")
                    if not data:
                        continue
                logger.debug("Discovered config file: %s", candidate)
                dir_entries.append(candidate)
                if get_bool_value_or_none(data, "root"):
                    stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)
            if stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            parent: Path = cur.parent
            if parent == cur:
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            anchor (Path | None): Discovery start (file or directory); defaults
                to the current working directory.
            extra_config_files (Iterable[Path] | None): Explicit files merged
                after discovery, in the given order.
            no_config (bool): Skip project discovery (defaults and explicit
                files are still merged).

        Returns:
            MutableConfig: The merged draft, ready for CLI overrides and `freeze`.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor or Path.cwd()):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            extra_cfg: MutableConfig | None = cls.from_toml_file(Path(extra))
            if extra_cfg is None:
                draft.diagnostics.add_warning(
                    f"{extra}: no [tool.shapegen] section found, file ignored"
                )
                continue
            draft = draft.merge_with(extra_cfg)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""

        def _pick(name: str) -> Any:
            value: Any = getattr(other, name)
            return value if value is not None else getattr(self, name)

        return MutableConfig(
            verbosity_level=_pick("verbosity_level"),
            apply_changes=_pick("apply_changes"),
            root_name=_pick("root_name"),
            declare_root=_pick("declare_root"),
            scalar_sequences=_pick("scalar_sequences"),
            type_overrides={**self.type_overrides, **other.type_overrides},
            sample_comments=_pick("sample_comments"),
            namespace=_pick("namespace"),
            extension=_pick("extension"),
            output_dir=_pick("output_dir"),
            config_files=self.config_files + other.config_files,
            diagnostics=DiagnosticLog.from_iterable([*self.diagnostics, *other.diagnostics]),
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from a CLI/API arguments mapping.

        Keys that are absent or ``None`` leave the current value untouched.
        Recognized keys: ``verbosity_level``, ``apply_changes``, ``root_name``,
        ``declare_root``, ``scalar_sequences``, ``sample_comments``,
        ``namespace``, ``extension``, ``output_dir``.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This draft, updated in place.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        def _given(key: str) -> bool:
            return args.get(key) is not None

        for key in (
            "verbosity_level",
            "apply_changes",
            "declare_root",
            "scalar_sequences",
            "sample_comments",
        ):
            if _given(key):
                setattr(self, key, args[key])

        if _given("root_name"):
            if is_valid_type_name(args["root_name"]):
                self.root_name = args["root_name"]
            else:
                self.diagnostics.add_warning(
                    f"--root-name {args['root_name']!r} is not a valid type name; ignored"
                )
        if _given("namespace"):
            if is_valid_namespace(args["namespace"]):
                self.namespace = args["namespace"]
            else:
                self.diagnostics.add_warning(
                    f"--namespace {args['namespace']!r} is not a dotted module prefix; ignored"
                )
        if _given("extension"):
            self.extension = str(args["extension"]).lstrip(".") or self.extension
        if _given("output_dir"):
            self.output_dir = Path(args["output_dir"]).resolve()
        return self
