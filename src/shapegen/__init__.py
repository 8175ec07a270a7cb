# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen: infer record types and JSON decoders from sample documents.

A sample JSON document is walked into a registry of object shapes and
collections, resolved into named record and alias declarations, and rendered
as Haskell source (record declarations plus ``FromJSON`` instances).

See `shapegen.api` for the programmatic entry points and `shapegen.cli.main`
for the ``shapegen`` command.
"""
