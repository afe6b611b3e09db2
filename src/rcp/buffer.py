"""Size-limited in-memory byte sink used to accumulate captured input."""

from __future__ import annotations

from rcp.errors import CaptureOverflowError


class CaptureBuffer:
    """Append-only byte buffer that refuses writes past a fixed limit.

    A rejected write leaves the content exactly as it was: either all of
    ``data`` is appended or none of it is.
    """

    def __init__(self, limit: int) -> None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        self._limit = limit
        self._chunks = bytearray()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def size(self) -> int:
        return len(self._chunks)

    def __len__(self) -> int:
        return self.size

    def append(self, data: bytes) -> None:
        """Append ``data``, or raise CaptureOverflowError if it would not fit.

        Writes that land exactly on the limit are allowed.
        """
        attempted = self.size + len(data)
        if attempted > self._limit:
            raise CaptureOverflowError(attempted, self._limit)
        self._chunks += data

    def getvalue(self) -> bytes:
        return bytes(self._chunks)
