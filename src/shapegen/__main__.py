# topmark:header:start
#
#   project      : ShapeGen
#   file         : __main__.py
#   file_relpath : src/shapegen/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Allow ``python -m shapegen``."""

from shapegen.cli.main import cli

if __name__ == "__main__":
    cli()
