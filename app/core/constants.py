"""
app/core/constants.py

Application-wide fixed constants.

These are business rules that are part of the system's contract and are
NOT configurable via environment variables.  The per-extension file policy
lives in app/policy/table.py.
"""

# ── Destinations ───────────────────────────────────────────────────────────────

#: Storage buckets an applicant document may be written to.
ALLOWED_DESTINATIONS: frozenset = frozenset({"resumes", "documents"})

#: Bucket used when a multipart request omits the 'bucket' field.
DEFAULT_DESTINATION: str = "resumes"

# ── Content scanning ───────────────────────────────────────────────────────────

#: Only this many leading bytes are decoded and scanned for suspicious text.
SCAN_WINDOW_BYTES: int = 10 * 1024

# ── Envelope messages ──────────────────────────────────────────────────────────

INTERNAL_ERROR_MESSAGE: str = "Internal verification error"
METHOD_NOT_ALLOWED_MESSAGE: str = "Method not allowed"
UNSUPPORTED_MEDIA_MESSAGE: str = "Unsupported content type"
GENERIC_USER_MESSAGE: str = "We couldn't verify your file. Please try again."
