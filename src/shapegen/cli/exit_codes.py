# topmark:header:start
#
#   project      : ShapeGen
#   file         : exit_codes.py
#   file_relpath : src/shapegen/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the ShapeGen CLI.

ShapeGen aligns with the BSD `sysexits` convention where practical. The one
deliberate divergence is ``WOULD_CHANGE = 2``: ``generate`` without
``--apply`` exits with it when a target module would be created or modified.
Click's own usage errors also exit with 2, so tests check
``result.exception`` to tell them apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the ShapeGen CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure.
        WOULD_CHANGE: Dry run: ``--apply`` would write at least one file.
        USAGE_ERROR: Invalid flags or arguments (``EX_USAGE``).
        INPUT_ERROR: The input is not valid JSON (``EX_DATAERR``).
        FILE_NOT_FOUND: The input path does not exist (``EX_NOINPUT``).
        INTERNAL_ERROR: Unexpected failure inside ShapeGen (``EX_SOFTWARE``).
        IO_ERROR: Reading or writing a file failed (``EX_IOERR``).
        PERMISSION_DENIED: Insufficient permissions (``EX_NOPERM``).
        CONFIG_ERROR: Missing or malformed configuration (``EX_CONFIG``).
        UNEXPECTED_ERROR: Last-resort bucket for unknown errors.
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2

    USAGE_ERROR = 64  # EX_USAGE
    INPUT_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    INTERNAL_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
