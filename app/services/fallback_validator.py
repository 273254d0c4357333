"""
app/services/fallback_validator.py

Reduced-assurance validator used by the caller when the network
verification service is unavailable or returned something unusable.

It runs the byte-free checks (extension, MIME, size, destination) against
the same policy table as the network pipeline, so both paths agree on those
outcomes.  It never inspects file bytes: no signature check and no content
scan.  ``signatureValid`` is always reported as true on success; callers
must not treat a fallback pass as equal to a full verification.
"""

from __future__ import annotations

from app.checks import check_destination
from app.core.exceptions import PolicyViolation
from app.core.logger import get_logger
from app.models.verification_models import VerificationResult
from app.services.verification_service import build_details, check_metadata

logger = get_logger(__name__)


class FallbackValidator:
    """Local, metadata-only mirror of the verification pipeline."""

    def validate(
        self,
        filename: str,
        content_type: str,
        size: int,
        destination: str,
    ) -> VerificationResult:
        try:
            extension, _ = check_metadata(filename, content_type, size)
            check_destination(destination)
        except PolicyViolation as exc:
            logger.info("'%s' rejected by fallback validator — %s", filename, exc)
            return VerificationResult.failure(str(exc))

        logger.info("'%s' accepted by fallback validator (signature not verified).", filename)
        return VerificationResult.success(
            build_details(filename, extension, content_type, size, signature_valid=True)
        )


fallback_validator = FallbackValidator()
