# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for ShapeGen.

Submodules:
    - `shapegen.config.logging`: logger setup (imported by almost every module,
      so this package does not import anything eagerly).
    - `shapegen.config.types`: `TypeNames` and `ArgsLike`.
    - `shapegen.config.io`: TOML helpers.
    - `shapegen.config.model`: `Config` / `MutableConfig` and layered loading.
"""
