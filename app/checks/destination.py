"""
app/checks/destination.py

Destination policy: uploads may only target an allow-listed bucket.
"""

from app.core.constants import ALLOWED_DESTINATIONS
from app.core.exceptions import PolicyViolation


def check_destination(destination: str) -> None:
    """
    Raises:
        PolicyViolation: The bucket is not in ``ALLOWED_DESTINATIONS``.
    """
    if destination not in ALLOWED_DESTINATIONS:
        raise PolicyViolation(f"Upload to bucket '{destination}' is not allowed")
