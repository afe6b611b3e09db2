"""Error taxonomy and exit codes for rcp.

Every failure in the capture pipeline is an ``RcpError`` carrying the exit
status the CLI should terminate with. Nothing is written to stdout once one of
these has been raised.
"""

from __future__ import annotations

from enum import IntEnum

OVERFLOW_HEADROOM = 1024


class ExitCode(IntEnum):
    """Process exit statuses."""

    SUCCESS = 0
    FAILURE = 1
    USAGE = 2


class RcpError(Exception):
    """Base class for errors that abort the capture pipeline."""

    exit_code: ExitCode = ExitCode.FAILURE


class CaptureOverflowError(RcpError):
    """Raised when a write would push the capture buffer past its limit."""

    def __init__(self, attempted: int, limit: int) -> None:
        super().__init__(f"{attempted} bytes exceeds limit {limit}")
        self.attempted = attempted
        self.limit = limit

    @property
    def suggested_limit(self) -> int:
        return self.attempted + OVERFLOW_HEADROOM


class OpenError(RcpError):
    """Raised when a named input file cannot be opened."""

    def __init__(self, path: str) -> None:
        super().__init__(f"not a file: {path}")
        self.path = path


class ReadError(RcpError):
    """Raised on an I/O failure while reading any source."""


class SubprocessFailedError(RcpError):
    """Raised when the exec command cannot be spawned or exits unsuccessfully."""

    def __init__(self, command: str, returncode: int | None = None, reason: str | None = None) -> None:
        if returncode is None:
            message = f"failed to run {command!r}: {reason or 'unknown error'}"
        elif returncode < 0:
            message = f"command {command!r} terminated by signal {-returncode}"
        else:
            message = f"command {command!r} exited with status {returncode}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode


class UsageError(RcpError):
    """Raised for incompatible flags or when no input source can be chosen."""

    exit_code = ExitCode.USAGE

    def __init__(self, message: str = "", show_help: bool = False) -> None:
        super().__init__(message)
        self.show_help = show_help
