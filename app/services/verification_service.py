"""
app/services/verification_service.py

Runs the document verification pipeline for one request:

    UploadRequest
      ├─ ContentUpload                       MetadataUpload
      │    1. extension + MIME                 1. extension + MIME
      │    2. size                             2. size
      │    3. signature (leading bytes)        3. signature (only if sampled)
      │    4. suspicious content (10 KB)       –  skipped, no content
      │    5. destination                      5. destination
      └─ VerificationResult envelope

Every step raises PolicyViolation; the first one short-circuits the rest.
The service holds no state, so one instance serves any number of
concurrent requests.
"""

from __future__ import annotations

from typing import Tuple

from app.checks import (
    check_content,
    check_content_type,
    check_destination,
    check_signature,
    check_size,
    resolve_policy,
)
from app.core.exceptions import PolicyViolation
from app.core.logger import get_logger
from app.models.verification_models import (
    ContentUpload,
    MetadataUpload,
    UploadRequest,
    VerificationDetails,
    VerificationResult,
)
from app.policy.table import FileTypePolicy, format_bytes

logger = get_logger(__name__)


def check_metadata(filename: str, content_type: str, size: int) -> Tuple[str, FileTypePolicy]:
    """
    Checks that need no file bytes: extension, declared MIME and size.

    Shared by the network pipeline and the fallback validator.

    Returns:
        ``(extension, policy)`` for the file.

    Raises:
        PolicyViolation: On the first failing check.
    """
    extension, policy = resolve_policy(filename)
    check_content_type(extension, policy, content_type)
    check_size(size, policy)
    return extension, policy


def build_details(
    filename: str,
    extension: str,
    content_type: str,
    size: int,
    signature_valid: bool,
) -> VerificationDetails:
    return VerificationDetails(
        filename=filename,
        extension=extension,
        content_type=content_type,
        size=size,
        size_formatted=format_bytes(size),
        signature_valid=signature_valid,
    )


class VerificationService:
    """
    Verifies a single upload request against the shared policy table.

    ``verify()`` is the entry point; it dispatches once on the request
    variant.  Only PolicyViolation is handled here; anything else propagates
    to the HTTP boundary, which answers with the internal-error envelope.
    """

    # ── Public API ─────────────────────────────────────────────────────────────

    def verify(self, request: UploadRequest) -> VerificationResult:
        if isinstance(request, ContentUpload):
            return self.verify_content(request)
        if isinstance(request, MetadataUpload):
            return self.verify_metadata(request)
        raise TypeError(f"Unsupported upload request: {type(request).__name__}")

    def verify_content(self, upload: ContentUpload) -> VerificationResult:
        """Full pipeline over the uploaded bytes."""
        try:
            extension, policy = check_metadata(upload.filename, upload.content_type, upload.size)
            check_signature(extension, policy, upload.head)
            check_content(upload.head)
            check_destination(upload.destination)
        except PolicyViolation as exc:
            return self._rejected(upload.filename, exc)

        return self._accepted(upload.filename, extension, upload.content_type, upload.size, True)

    def verify_metadata(self, upload: MetadataUpload) -> VerificationResult:
        """
        Pipeline over metadata and an optional signature sample.

        Without a sample the signature step is assumed to pass and
        ``signatureValid`` is reported as true; nothing was inspected.
        """
        try:
            extension, policy = check_metadata(upload.filename, upload.content_type, upload.size)
            if upload.signature_sample:
                check_signature(extension, policy, upload.signature_sample)
            else:
                logger.debug("'%s' — no signature sample, signature check skipped.", upload.filename)
            check_destination(upload.destination)
        except PolicyViolation as exc:
            return self._rejected(upload.filename, exc)

        return self._accepted(upload.filename, extension, upload.content_type, upload.size, True)

    # ── Internals ──────────────────────────────────────────────────────────────

    @staticmethod
    def _rejected(filename: str, exc: PolicyViolation) -> VerificationResult:
        logger.info("'%s' rejected — %s", filename, exc)
        return VerificationResult.failure(str(exc))

    @staticmethod
    def _accepted(
        filename: str,
        extension: str,
        content_type: str,
        size: int,
        signature_valid: bool,
    ) -> VerificationResult:
        logger.info("'%s' accepted (%s).", filename, format_bytes(size))
        return VerificationResult.success(
            build_details(filename, extension, content_type, size, signature_valid)
        )


# ── Module-level singleton ─────────────────────────────────────────────────────
# Controllers import this instance.  It is stateless, so tests may use it
# directly or build their own.

verification_service = VerificationService()
