"""
app/checks/extension.py

Extension/MIME resolver: derive the extension from a filename, look up its
policy and make sure the declared content type belongs to that extension.
"""

from __future__ import annotations

from typing import Tuple

from app.core.exceptions import PolicyViolation
from app.policy.table import ALLOWED_EXTENSIONS, FileTypePolicy, get_policy


def get_extension(filename: str) -> str:
    """
    Lowercased text after the last '.'.

    Returns an empty string when there is no '.' or nothing follows it.
    """
    _, dot, suffix = filename.rpartition(".")
    return suffix.lower() if dot else ""


def resolve_policy(filename: str) -> Tuple[str, FileTypePolicy]:
    """
    Return ``(extension, policy)`` for an allowed filename.

    Raises:
        PolicyViolation: The extension is missing or not in the policy table.
    """
    extension = get_extension(filename)
    policy = get_policy(extension) if extension else None
    if policy is None:
        raise PolicyViolation(
            f"File type '.{extension or 'unknown'}' is not allowed. "
            f"Allowed types: {', '.join(ALLOWED_EXTENSIONS)}"
        )
    return extension, policy


def check_content_type(extension: str, policy: FileTypePolicy, content_type: str) -> None:
    """
    Raises:
        PolicyViolation: The declared MIME type is not listed for the extension.
    """
    if not policy.accepts_mime(content_type):
        raise PolicyViolation(
            f"Content type '{content_type}' does not match file extension '.{extension}'"
        )
