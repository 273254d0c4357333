"""
app/core/exceptions.py

Custom exception hierarchy for the application.

Raising typed exceptions from checks and services lets controllers catch
specific cases and return the correct HTTP status code without leaking
internals.  All three server-side kinds end up in the same
{valid, error?, details?} envelope; only the status code differs.
"""


class AppBaseException(Exception):
    """Root exception — catch-all for any application-level error."""


# ── Verification failures ──────────────────────────────────────────────────────

class PolicyViolation(AppBaseException):
    """
    The file itself was judged and rejected (extension, MIME, size,
    signature, content or destination).  The message is safe and useful
    to show to the end user verbatim.
    """

    status_code = 422


class ProtocolError(AppBaseException):
    """
    The request could not be understood: malformed body, missing or
    mistyped fields, unsupported media type or disallowed method.
    Never a judgment about the file.
    """

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class InternalVerificationError(AppBaseException):
    """Raised when an unexpected fault interrupts the verification pipeline."""

    status_code = 500


# ── Caller-side ────────────────────────────────────────────────────────────────

class VerificationUnavailableError(AppBaseException):
    """
    Raised inside the client when the network verification path did not
    produce a usable policy judgment and the fallback must take over.
    """
