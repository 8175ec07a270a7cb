# topmark:header:start
#
#   project      : ShapeGen
#   file         : writer.py
#   file_relpath : src/shapegen/output/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Write generated modules to a sink.

Sinks
-----
- FileSystemSink: writes the module below the output directory, creating
  parent directories; the write goes through a temporary file that replaces
  the target in one step.
- StdoutSink: prints the module source.
- NullSink: no-op (dry-run); reports whether the target would change.

`select_sink` picks the sink from the runtime config so that the CLI and the
public API make the same decision.
"""

from __future__ import annotations

import os
import stat
import tempfile
from typing import TYPE_CHECKING, Protocol

import click

from shapegen.config.logging import get_logger
from shapegen.output.model import GeneratedModule, WriteResult, WriteStatus, would_change

if TYPE_CHECKING:
    from pathlib import Path

    from shapegen.config.logging import ShapegenLogger
    from shapegen.config.model import Config

logger: ShapegenLogger = get_logger(__name__)


class WriteSink(Protocol):
    """Protocol for sinks receiving generated modules."""

    def write(self, module: GeneratedModule) -> WriteResult:
        """Deliver ``module`` to the sink and report what happened."""
        ...


class NullSink:
    """Dry-run sink: does not write anything."""

    def write(self, module: GeneratedModule) -> WriteResult:
        """Return ``WOULD_WRITE`` when the target differs, otherwise ``UNCHANGED``."""
        if would_change(module):
            return WriteResult(status=WriteStatus.WOULD_WRITE)
        return WriteResult(status=WriteStatus.UNCHANGED)


class StdoutSink:
    """Standard-output sink."""

    def write(self, module: GeneratedModule) -> WriteResult:
        """Print the module source; ``SKIPPED`` for an empty module."""
        if not module.text:
            return WriteResult(status=WriteStatus.SKIPPED)
        click.echo(module.text, nl=False)
        return WriteResult(
            status=WriteStatus.WRITTEN, bytes_written=len(module.text.encode("utf-8"))
        )


def target_file_mode(path: Path) -> int:
    """Return the permission bits for writing ``path``.

    An existing file keeps its mode; a new file gets ``0o666`` masked by the
    process umask, as ``open()`` would give it.
    """
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask: int = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class FileSystemSink:
    """Filesystem sink that writes ``module.path`` atomically."""

    def write(self, module: GeneratedModule) -> WriteResult:
        """Write the module unless the target already holds the same text.

        Args:
            module (GeneratedModule): Module to write.

        Returns:
            WriteResult: ``UNCHANGED`` when the file is up to date, otherwise
            ``WRITTEN`` with the number of UTF-8 bytes written.

        Raises:
            OSError: If the directory cannot be created or the file cannot be written.
        """
        if not would_change(module):
            logger.debug("FileSystemSink: %s is up to date", module.path)
            return WriteResult(status=WriteStatus.UNCHANGED)

        target_dir = module.path.parent
        target_dir.mkdir(parents=True, exist_ok=True)
        data: bytes = module.text.encode("utf-8")
        mode: int = target_file_mode(module.path)
        fd, tmp_name = tempfile.mkstemp(
            dir=target_dir, prefix=f".{module.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, module.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("FileSystemSink: wrote %d bytes to file %s", len(data), module.path)
        return WriteResult(status=WriteStatus.WRITTEN, bytes_written=len(data))


def select_sink(config: Config, *, to_stdout: bool = False) -> WriteSink:
    """Return the sink for the given runtime config.

    Args:
        config (Config): Runtime configuration (``apply_changes`` decides dry-run).
        to_stdout (bool): Print instead of writing files.

    Returns:
        WriteSink: ``StdoutSink`` when printing, ``NullSink`` when not applying,
        otherwise ``FileSystemSink``.
    """
    if to_stdout:
        logger.debug("Selected STDOUT sink")
        return StdoutSink()
    if not config.apply_changes:
        logger.debug("Selected NULL sink (config.apply_changes is not set)")
        return NullSink()
    logger.debug("Selected file system sink")
    return FileSystemSink()


def write_module(module: GeneratedModule, sink: WriteSink) -> WriteResult:
    """Hand ``module`` to ``sink`` and log the outcome."""
    result: WriteResult = sink.write(module)
    logger.info("%s: %s (%d bytes)", module.path, result.status.value, result.bytes_written)
    return result
