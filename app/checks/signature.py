"""
app/checks/signature.py

Magic-byte validator.  Compares the leading bytes of a buffer (the whole
file or a caller-supplied sample) against every signature alternative
configured for the extension.  Only ``len(signature)`` bytes are ever
inspected, so cost does not depend on the file size.
"""

from __future__ import annotations

from app.core.exceptions import PolicyViolation
from app.policy.table import FileTypePolicy


def matches_signature(policy: FileTypePolicy, data: bytes) -> bool:
    """
    True when any configured signature matches at offset 0.

    No configured signatures is a trivial pass.  A buffer shorter than an
    alternative can never match that alternative.
    """
    if not policy.signatures:
        return True

    return any(
        len(data) >= len(signature) and data[: len(signature)] == signature
        for signature in policy.signatures
    )


def check_signature(extension: str, policy: FileTypePolicy, data: bytes) -> None:
    """
    Raises:
        PolicyViolation: No signature alternative matched.
    """
    if not matches_signature(policy, data):
        raise PolicyViolation(
            f"File content does not match expected format for '.{extension}' files. "
            "The file may be corrupted or misnamed."
        )
