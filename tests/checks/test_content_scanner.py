"""
tests/checks/test_content_scanner.py

Tests for the suspicious-content heuristic and its 10 KB scan window.
"""

import pytest

from app.checks.content_scanner import (
    SUSPICIOUS_CONTENT_MESSAGE,
    check_content,
    decode_window,
    find_suspicious_pattern,
)
from app.core.constants import SCAN_WINDOW_BYTES
from app.core.exceptions import PolicyViolation

PDF_PREFIX = b"%PDF-1.7\n"


class TestFindSuspiciousPattern:

    @pytest.mark.parametrize(
        ("payload", "detector"),
        [
            (b"<script>alert(1)</script>", "script tag"),
            (b"<SCRIPT src='x.js'>", "script tag"),
            (b"<% Response.Write('script') %>", "server-side script block"),
            (b"/URI (javascript:alert(1))", "javascript protocol"),
            (b"href='VBScript:msgbox'", "vbscript protocol"),
            (b"<img src=x onerror=alert(1)>", "inline event handler"),
            (b"<body onload = 'go()'>", "inline event handler"),
            (b"data:text/html;base64,PHNjcmlwdD4=", "html data uri"),
            (b'{"__proto__": {"admin": true}}', "prototype pollution"),
            (b"eval (atob('YWxlcnQoMSk='))", "eval call"),
        ],
    )
    def test_detectors(self, payload: bytes, detector: str) -> None:
        assert find_suspicious_pattern(PDF_PREFIX + payload) == detector

    def test_plain_document_text_is_clean(self, sample_files) -> None:
        for _, _, content in sample_files.values():
            assert find_suspicious_pattern(content) is None

    def test_invalid_utf8_does_not_raise(self) -> None:
        assert find_suspicious_pattern(b"\xff\xfe\xfd" * 100) is None

    def test_pattern_survives_surrounding_binary(self) -> None:
        data = b"\x89PNG\r\n\x1a\n\xff\x00" + b"<script>" + b"\xc3\x28"
        assert find_suspicious_pattern(data) == "script tag"


class TestScanWindow:

    def test_window_is_10_kb(self) -> None:
        assert SCAN_WINDOW_BYTES == 10240

    def test_decode_window_is_bounded(self) -> None:
        assert len(decode_window(b"a" * (SCAN_WINDOW_BYTES * 3))) == SCAN_WINDOW_BYTES

    def test_pattern_inside_window_is_rejected(self) -> None:
        data = PDF_PREFIX + b"x" * 5000 + b"<script>" + b"x" * 10000

        with pytest.raises(PolicyViolation) as exc_info:
            check_content(data)
        assert str(exc_info.value) == SUSPICIOUS_CONTENT_MESSAGE

    def test_pattern_ending_exactly_at_window_edge_is_rejected(self) -> None:
        marker = b"<script>"
        data = b"x" * (SCAN_WINDOW_BYTES - len(marker)) + marker + b"x" * 100

        with pytest.raises(PolicyViolation):
            check_content(data)

    def test_pattern_after_byte_10240_is_not_scanned(self) -> None:
        """Intended boundary: content beyond the window is never inspected."""
        data = PDF_PREFIX + b"x" * SCAN_WINDOW_BYTES + b"<script>alert(1)</script>"

        assert len(data) > SCAN_WINDOW_BYTES
        check_content(data)

    def test_pattern_straddling_the_edge_is_not_seen(self) -> None:
        data = b"x" * (SCAN_WINDOW_BYTES - 4) + b"<script>" + b"x" * 10

        check_content(data)
