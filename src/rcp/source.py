"""Input source selection and capture.

Decides where the clipboard text comes from and fills a CaptureBuffer from it:

- ``rcp -e "cmd"``  runs ``cmd`` through the shell; captures ``cmd\\n`` + stdout
- ``rcp -``         reads stdin explicitly
- ``rcp <file>``    reads a file, optionally prefixed with ``cat <file>\\n``
- ``rcp``           reads stdin when it is a pipe or redirect

The priority order lives in ``select_mode`` and nowhere else.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO

from rcp.buffer import CaptureBuffer
from rcp.errors import CaptureOverflowError, OpenError, SubprocessFailedError, UsageError
from rcp.reader import drain

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"
DEFAULT_SHELL = "bash"


class CaptureMode(Enum):
    UNDETERMINED = "undetermined"
    FILE = "file"
    EXPLICIT_STDIN = "explicit_stdin"
    PIPED_STDIN = "piped_stdin"
    SUBPROCESS = "subprocess"

    @property
    def reads_stdin(self) -> bool:
        return self in (CaptureMode.EXPLICIT_STDIN, CaptureMode.PIPED_STDIN)


@dataclass(frozen=True)
class CaptureRequest:
    """Resolved command-line inputs for one invocation."""

    annotate: bool = False
    exec_command: str | None = None
    path: str | None = None
    stdin_is_piped: bool = False


def select_mode(request: CaptureRequest) -> CaptureMode:
    """Pick the capture mode for ``request``.

    Returns CaptureMode.UNDETERMINED when no source applies; the caller is
    expected to show help in that case.

    Raises:
        UsageError: If ``-c`` is combined with ``-e`` or with a stdin source.
    """
    if request.exec_command and request.annotate:
        raise UsageError("-c can't be used with -e")

    if request.exec_command:
        mode = CaptureMode.SUBPROCESS
    elif request.path == STDIN_MARKER:
        mode = CaptureMode.EXPLICIT_STDIN
    elif request.path:
        mode = CaptureMode.FILE
    elif request.stdin_is_piped:
        mode = CaptureMode.PIPED_STDIN
    else:
        mode = CaptureMode.UNDETERMINED

    if request.annotate and mode.reads_stdin:
        raise UsageError("-c only works with a filename (rcp -c <file>)")

    logger.debug("Selected capture mode %s", mode.value)
    return mode


def capture(
    request: CaptureRequest,
    limit: int,
    stdin: BinaryIO | None = None,
    shell: str = DEFAULT_SHELL,
) -> bytes:
    """Capture the bytes described by ``request``, at most ``limit`` of them.

    ``stdin`` is the binary stream used by the stdin modes.

    Raises:
        UsageError: For invalid flag combinations or an undetermined mode.
        CaptureOverflowError: If the prefix plus body would exceed ``limit``.
        OpenError: If the named file cannot be opened.
        ReadError: If reading the source fails.
        SubprocessFailedError: If the command cannot be started or fails.
    """
    mode = select_mode(request)
    buffer = CaptureBuffer(limit)

    if mode is CaptureMode.SUBPROCESS:
        capture_command(request.exec_command or "", buffer, shell=shell)
    elif mode is CaptureMode.FILE:
        capture_file(request.path or "", buffer, annotate=request.annotate)
    elif mode.reads_stdin:
        if stdin is None:
            raise UsageError("no stdin stream available")
        drain(stdin, buffer)
    else:
        raise UsageError(show_help=True)

    return buffer.getvalue()


def capture_file(path: str, buffer: CaptureBuffer, annotate: bool = False) -> None:
    """Drain the file at ``path`` into ``buffer``, optionally after ``cat <path>``."""
    try:
        handle = open(path, "rb")
    except OSError as exc:
        logger.debug("Could not open %s: %s", path, exc)
        raise OpenError(path) from exc

    with handle:
        if annotate:
            buffer.append(b"cat " + os.fsencode(path) + b"\n")
        drain(handle, buffer)


def capture_command(command: str, buffer: CaptureBuffer, shell: str = DEFAULT_SHELL) -> None:
    """Run ``command`` via ``shell -c`` and capture ``command\\n`` plus its stdout.

    The child reads stdin from /dev/null and inherits stderr, so its
    diagnostics reach the user's terminal as-is.
    An overflow takes precedence over the child's exit status.
    """
    buffer.append(os.fsencode(command) + b"\n")

    argv = [shell, "-c", command]
    logger.debug("Spawning %s", argv)
    try:
        proc = subprocess.Popen(argv, stdin=subprocess.DEVNULL, stdout=subprocess.PIPE)
    except OSError as exc:
        raise SubprocessFailedError(command, reason=str(exc)) from exc

    # Exiting the block closes stdout before waiting, so a child still writing
    # after an overflow gets EPIPE instead of blocking.
    with proc:
        try:
            drain(proc.stdout, buffer)
        except CaptureOverflowError:
            logger.debug("Overflow while reading from %r; abandoning its output", command)
            raise

    logger.debug("Command %r exited with status %s", command, proc.returncode)
    if proc.returncode != 0:
        raise SubprocessFailedError(command, returncode=proc.returncode)
