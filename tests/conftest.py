"""Ensure tests import rcp from this checkout, not from an external editable install."""

import sys
from pathlib import Path

import pytest

# Prepend this checkout's src/ so tests always use local code,
# even when pytest is invoked by a Python from a different venv.
_src = str(Path(__file__).resolve().parent.parent / "src")
if _src not in sys.path:
    sys.path.insert(0, _src)


@pytest.fixture(autouse=True)
def clear_limit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's RCOPY_MAX_BYTES from leaking into tests."""
    monkeypatch.delenv("RCOPY_MAX_BYTES", raising=False)
