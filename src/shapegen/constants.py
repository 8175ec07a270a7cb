# topmark:header:start
#
#   project      : ShapeGen
#   file         : constants.py
#   file_relpath : src/shapegen/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

SHAPEGEN_VERSION: str = get_version("shapegen")

# Name of the bundled default config inside the package `shapegen.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "shapegen.config"
DEFAULT_TOML_CONFIG_NAME: str = "shapegen-default.toml"

# Project-level config files, discovered from the input's directory upward:
PYPROJECT_TOML_NAME: str = "pyproject.toml"
SHAPEGEN_TOML_NAME: str = "shapegen.toml"
PYPROJECT_TOOL_SECTION: str = "tool.shapegen"

# Marker used on the command line for "read the document from STDIN":
STDIN_MARKER: str = "-"
