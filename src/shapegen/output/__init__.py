# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/output/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generated modules and the sinks that write them."""

from __future__ import annotations

from shapegen.output.model import (
    GeneratedModule,
    WriteResult,
    WriteStatus,
    unified_diff,
    would_change,
)
from shapegen.output.writer import (
    FileSystemSink,
    NullSink,
    StdoutSink,
    WriteSink,
    select_sink,
    write_module,
)

__all__ = [
    "FileSystemSink",
    "GeneratedModule",
    "NullSink",
    "StdoutSink",
    "WriteResult",
    "WriteSink",
    "WriteStatus",
    "select_sink",
    "unified_diff",
    "would_change",
    "write_module",
]
