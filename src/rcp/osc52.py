"""OSC52 clipboard escape sequence framing.

Terminals that support OSC52 set the system clipboard from::

    ESC ] 52 ; c ; <base64 payload> ESC \\

Terminals that don't are expected to ignore the sequence.
"""

from __future__ import annotations

import base64

OSC52_START = "\x1b]52;c;"
OSC52_END = "\x1b\\"


def render(data: bytes) -> str:
    """Return the OSC52 "set clipboard" sequence carrying ``data``."""
    payload = base64.b64encode(data).decode("ascii")
    return f"{OSC52_START}{payload}{OSC52_END}"


def render_bytes(data: bytes) -> bytes:
    return render(data).encode("ascii")


def decode(sequence: str) -> bytes:
    """Extract the payload bytes from a sequence produced by ``render``.

    Raises:
        ValueError: If ``sequence`` is not a complete OSC52 clipboard sequence.
    """
    if not (sequence.startswith(OSC52_START) and sequence.endswith(OSC52_END)):
        raise ValueError("not an OSC52 clipboard sequence")
    payload = sequence[len(OSC52_START) : -len(OSC52_END)]
    return base64.b64decode(payload, validate=True)
