"""
app/checks/content_scanner.py

Shallow heuristic scan for script/markup payloads hidden in uploads.

The first ``SCAN_WINDOW_BYTES`` of the file are decoded leniently as UTF-8
and matched against a fixed list of detectors.  Content after the window is
never looked at; a marker at byte 10 241 of a large file passes.

This is a defence-in-depth layer only.  It is not malware scanning and a
production deployment should pair it with a dedicated scanning service.
"""

from __future__ import annotations

import re
from typing import Optional, Pattern, Tuple

from app.core.constants import SCAN_WINDOW_BYTES
from app.core.exceptions import PolicyViolation

SUSPICIOUS_CONTENT_MESSAGE = "File contains potentially malicious content"

SUSPICIOUS_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("server-side script block", re.compile(r"<%[^>]*script", re.IGNORECASE)),
    ("script tag", re.compile(r"<script[^>]*>", re.IGNORECASE)),
    ("javascript protocol", re.compile(r"javascript:", re.IGNORECASE)),
    ("vbscript protocol", re.compile(r"vbscript:", re.IGNORECASE)),
    ("inline event handler", re.compile(r"\bon[a-z]+\s*=", re.IGNORECASE)),
    ("html data uri", re.compile(r"data:text/html", re.IGNORECASE)),
    ("prototype pollution", re.compile(r"__proto__", re.IGNORECASE)),
    ("eval call", re.compile(r"\beval\s*\(", re.IGNORECASE)),
)


def decode_window(data: bytes, window: int = SCAN_WINDOW_BYTES) -> str:
    """Decode at most ``window`` leading bytes, replacing invalid sequences."""
    return data[:window].decode("utf-8", errors="replace")


def find_suspicious_pattern(data: bytes) -> Optional[str]:
    """Return the name of the first detector that fires, or None."""
    text = decode_window(data)
    for name, pattern in SUSPICIOUS_PATTERNS:
        if pattern.search(text):
            return name
    return None


def check_content(data: bytes) -> None:
    """
    Raises:
        PolicyViolation: A suspicious pattern appears in the scan window.
    """
    if find_suspicious_pattern(data) is not None:
        raise PolicyViolation(SUSPICIOUS_CONTENT_MESSAGE)
