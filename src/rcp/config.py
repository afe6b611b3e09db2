"""Configuration for rcp.

The only setting is the capture size limit, read once from the
``RCOPY_MAX_BYTES`` environment variable. Anything unusable falls back to the
default, so a bad override never prevents a copy.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

MAX_BYTES_ENV = "RCOPY_MAX_BYTES"
DEFAULT_MAX_BYTES = 100000

INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class RcpConfig:
    """Resolved settings for a single invocation."""

    max_bytes: int = DEFAULT_MAX_BYTES


def default_config() -> RcpConfig:
    """Return the built-in default configuration."""
    return RcpConfig()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_max_bytes(value: str | None, default: int = DEFAULT_MAX_BYTES) -> int:
    """Parse a size limit override.

    Returns ``default`` when ``value`` is unset, empty, not a decimal integer,
    zero, or negative.
    """
    if not value:
        return default
    if not INTEGER_RE.fullmatch(value):
        logger.debug("Ignoring malformed %s=%r", MAX_BYTES_ENV, value)
        return default
    limit = int(value)
    if limit <= 0:
        logger.debug("Ignoring non-positive %s=%d", MAX_BYTES_ENV, limit)
        return default
    return limit


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_config(environ: Mapping[str, str] | None = None) -> RcpConfig:
    """Resolve configuration from ``environ`` (defaults to ``os.environ``)."""
    if environ is None:
        environ = os.environ
    return RcpConfig(max_bytes=parse_max_bytes(environ.get(MAX_BYTES_ENV)))
