"""app/checks/__init__.py — public API of the checks package."""

from app.checks.content_scanner import check_content, find_suspicious_pattern
from app.checks.destination import check_destination
from app.checks.extension import check_content_type, get_extension, resolve_policy
from app.checks.signature import check_signature, matches_signature
from app.checks.size import check_size

__all__ = [
    "check_content",
    "check_content_type",
    "check_destination",
    "check_signature",
    "check_size",
    "find_suspicious_pattern",
    "get_extension",
    "matches_signature",
    "resolve_policy",
]
