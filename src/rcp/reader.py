"""Chunked copy from a binary stream into a CaptureBuffer."""

from __future__ import annotations

import logging
from typing import BinaryIO

from rcp.buffer import CaptureBuffer
from rcp.errors import ReadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 32 * 1024


def drain(stream: BinaryIO, buffer: CaptureBuffer, chunk_size: int = CHUNK_SIZE) -> int:
    """Read ``stream`` to end-of-stream, appending every chunk to ``buffer``.

    Returns the number of bytes read from the stream.

    Raises:
        CaptureOverflowError: As soon as a chunk does not fit; the rest of the
            stream is left unread.
        ReadError: If reading the stream fails.
    """
    total = 0
    while True:
        try:
            chunk = stream.read(chunk_size)
        except OSError as exc:
            raise ReadError(f"read failed: {exc}") from exc
        if not chunk:
            break
        buffer.append(chunk)
        total += len(chunk)
    logger.debug("Drained %d bytes (buffer now %d/%d)", total, buffer.size, buffer.limit)
    return total
