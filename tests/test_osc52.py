"""Tests for OSC52 framing."""

import base64

import pytest

from rcp.osc52 import OSC52_END, OSC52_START, decode, render, render_bytes


class TestRender:
    def test_envelope_is_bit_exact(self) -> None:
        assert render(b"hello\n") == "\x1b]52;c;aGVsbG8K\x1b\\"

    def test_empty_payload(self) -> None:
        assert render(b"") == "\x1b]52;c;\x1b\\"

    def test_padding_kept(self) -> None:
        assert render(b"a") == f"{OSC52_START}YQ=={OSC52_END}"

    def test_no_trailing_newline(self) -> None:
        assert not render(b"text\n").endswith("\n")

    def test_render_bytes(self) -> None:
        assert render_bytes(b"hi") == b"\x1b]52;c;aGk=\x1b\\"

    def test_utf8_bytes_roundtrip(self) -> None:
        data = "snowman ☃\n".encode()
        payload = render(data)[len(OSC52_START) : -len(OSC52_END)]
        assert base64.b64decode(payload) == data


class TestDecode:
    def test_decodes_rendered_sequence(self) -> None:
        data = bytes(range(256))
        assert decode(render(data)) == data

    def test_rejects_missing_terminator(self) -> None:
        with pytest.raises(ValueError, match="not an OSC52"):
            decode("\x1b]52;c;aGk=")

    def test_rejects_other_selection(self) -> None:
        with pytest.raises(ValueError):
            decode("\x1b]52;p;aGk=\x1b\\")
