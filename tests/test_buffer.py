"""Tests for the size-limited capture buffer."""

import pytest

from rcp.buffer import CaptureBuffer
from rcp.errors import CaptureOverflowError


class TestAppend:
    def test_starts_empty(self) -> None:
        buf = CaptureBuffer(10)
        assert buf.size == 0
        assert len(buf) == 0
        assert buf.getvalue() == b""
        assert buf.limit == 10

    def test_appends_in_order(self) -> None:
        buf = CaptureBuffer(100)
        buf.append(b"hello ")
        buf.append(b"world")
        assert buf.getvalue() == b"hello world"
        assert buf.size == 11

    def test_exactly_at_limit_is_allowed(self) -> None:
        buf = CaptureBuffer(5)
        buf.append(b"12345")
        assert buf.size == 5

    def test_one_past_limit_overflows(self) -> None:
        buf = CaptureBuffer(5)
        with pytest.raises(CaptureOverflowError) as exc_info:
            buf.append(b"123456")
        assert exc_info.value.attempted == 6
        assert exc_info.value.limit == 5

    def test_attempted_size_includes_existing_content(self) -> None:
        buf = CaptureBuffer(10)
        buf.append(b"1234567")
        with pytest.raises(CaptureOverflowError) as exc_info:
            buf.append(b"abcd")
        assert exc_info.value.attempted == 11

    def test_overflow_keeps_previous_content(self) -> None:
        buf = CaptureBuffer(4)
        buf.append(b"ab")
        with pytest.raises(CaptureOverflowError):
            buf.append(b"cde")
        assert buf.getvalue() == b"ab"
        assert buf.size == 2

    def test_can_fill_remaining_space_after_overflow(self) -> None:
        buf = CaptureBuffer(4)
        buf.append(b"ab")
        with pytest.raises(CaptureOverflowError):
            buf.append(b"cde")
        buf.append(b"cd")
        assert buf.getvalue() == b"abcd"

    def test_empty_append_on_full_buffer(self) -> None:
        buf = CaptureBuffer(3)
        buf.append(b"abc")
        buf.append(b"")
        assert buf.getvalue() == b"abc"

    def test_zero_limit_rejects_any_byte(self) -> None:
        buf = CaptureBuffer(0)
        with pytest.raises(CaptureOverflowError):
            buf.append(b"x")

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            CaptureBuffer(-1)


class TestOverflowError:
    def test_suggested_limit_adds_headroom(self) -> None:
        exc = CaptureOverflowError(attempted=10, limit=5)
        assert exc.suggested_limit == 1034

    def test_message(self) -> None:
        exc = CaptureOverflowError(attempted=10, limit=5)
        assert str(exc) == "10 bytes exceeds limit 5"
