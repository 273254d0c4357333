"""app/policy/__init__.py — public API of the policy package."""

from app.policy.table import (
    ALLOWED_EXTENSIONS,
    MAX_SIGNATURE_LENGTH,
    POLICY_TABLE,
    FileTypePolicy,
    format_bytes,
    get_policy,
)

__all__ = [
    "ALLOWED_EXTENSIONS",
    "MAX_SIGNATURE_LENGTH",
    "POLICY_TABLE",
    "FileTypePolicy",
    "format_bytes",
    "get_policy",
]
