"""
app/checks/size.py

Size limiter.  An empty file and an oversized file are distinct failures
with distinct messages.
"""

from app.core.exceptions import PolicyViolation
from app.policy.table import FileTypePolicy, format_bytes

EMPTY_FILE_MESSAGE = "File is empty"


def check_size(size: int, policy: FileTypePolicy) -> None:
    """
    Require ``0 < size <= policy.max_size_bytes``.

    Raises:
        PolicyViolation: The file is empty or larger than the cap.
    """
    if size <= 0:
        raise PolicyViolation(EMPTY_FILE_MESSAGE)

    if size > policy.max_size_bytes:
        raise PolicyViolation(
            f"File size ({format_bytes(size)}) exceeds maximum allowed size "
            f"({format_bytes(policy.max_size_bytes)})"
        )
