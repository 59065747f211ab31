"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a command carries one of these values instead
of a bare ``1``. Signal translation is left to ``lib_cli_exit_tools``.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following sysexits.h and errno conventions.

    Example:
        >>> int(ExitCode.PROVIDER_FAILURE)
        69
        >>> ExitCode.CONFIG_ERROR
        <ExitCode.CONFIG_ERROR: 78>
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2  # ENOENT
    INVALID_ARGUMENT = 22  # EINVAL
    PROVIDER_FAILURE = 69  # EX_UNAVAILABLE
    CONFIG_ERROR = 78  # EX_CONFIG


__all__ = ["ExitCode"]
