"""
app/client/verifier.py

The only entry point the rest of an application needs:

    result = await verify(DocumentFile(...), destination="resumes")
    if not result.valid:
        show(result.error)

Decision flow for one call:

    service not configured / demo mode ──────────────► fallback validator
    POST /document-verify/
      ├─ transport error, timeout ───────────────────► fallback validator
      ├─ non-JSON / unparsable / malformed envelope ─► fallback validator
      ├─ 200 valid  or  422 policy rejection ────────► returned as-is
      └─ anything else (400/405/415/5xx) ────────────► fallback validator
    fallback raises ─────────────────────────────────► generic "try again"

Policy rejections are returned verbatim because they are actionable for the
applicant.  Protocol and internal errors are never shown; they only mean
the network path is unavailable.  Nothing is retried or cached here.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from app.core.config import settings
from app.core.constants import DEFAULT_DESTINATION, GENERIC_USER_MESSAGE
from app.core.exceptions import PolicyViolation, VerificationUnavailableError
from app.core.logger import get_logger
from app.models.verification_models import VerificationResult
from app.services.fallback_validator import FallbackValidator, fallback_validator

logger = get_logger(__name__)

VERIFY_PATH = "/document-verify/"


class DocumentFile(BaseModel):
    """A file picked by the applicant, as the calling application holds it."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class DocumentVerifier:
    """
    Chooses between the network verification service and the local
    fallback for each call.  All arguments default to ``settings``;
    ``transport`` lets tests route requests to an in-process app or a mock.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        request_mode: Optional[str] = None,
        demo_mode: Optional[bool] = None,
        signature_sample_bytes: Optional[int] = None,
        fallback: Optional[FallbackValidator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url if base_url is not None else settings.verify_service_url
        self._timeout = timeout if timeout is not None else settings.verify_timeout_seconds
        self._request_mode = request_mode or settings.verify_request_mode
        self._demo_mode = demo_mode if demo_mode is not None else settings.demo_mode
        self._sample_bytes = signature_sample_bytes or settings.signature_sample_bytes
        self._fallback = fallback or fallback_validator
        self._transport = transport

    @property
    def service_configured(self) -> bool:
        return bool(self._base_url) and not self._demo_mode

    # ── Public API ─────────────────────────────────────────────────────────────

    async def verify(
        self,
        file: DocumentFile,
        destination: str = DEFAULT_DESTINATION,
    ) -> VerificationResult:
        """
        Verify ``file`` for upload to ``destination``.

        Never raises; every outcome is a VerificationResult envelope.
        """
        if not self.service_configured:
            logger.info(
                "Verification service not configured — validating '%s' locally.",
                file.filename,
            )
            return self._verify_locally(file, destination)

        try:
            return await self._verify_remotely(file, destination)
        except VerificationUnavailableError as exc:
            logger.warning(
                "Verification service unusable for '%s' (%s) — falling back to local validation.",
                file.filename,
                exc,
            )
            return self._verify_locally(file, destination)

    # ── Internals ──────────────────────────────────────────────────────────────

    def _request_kwargs(self, file: DocumentFile, destination: str) -> Dict[str, Any]:
        if self._request_mode == "content":
            return {
                "files": {"file": (file.filename, file.content, file.content_type)},
                "data": {"bucket": destination},
            }
        return {
            "json": {
                "filename": file.filename,
                "contentType": file.content_type,
                "size": file.size,
                "bucket": destination,
                "fileSignature": list(file.content[: self._sample_bytes]),
            }
        }

    async def _verify_remotely(self, file: DocumentFile, destination: str) -> VerificationResult:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(VERIFY_PATH, **self._request_kwargs(file, destination))
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise VerificationUnavailableError(f"request failed: {exc!r}") from exc

        return self._parse_response(response)

    @staticmethod
    def _parse_response(response: httpx.Response) -> VerificationResult:
        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            raise VerificationUnavailableError(f"non-JSON response ({content_type or 'no content type'})")

        try:
            body = response.json()
        except ValueError as exc:
            raise VerificationUnavailableError("response body is not valid JSON") from exc

        try:
            result = VerificationResult.model_validate(body)
        except ValidationError as exc:
            raise VerificationUnavailableError("response is not a verification envelope") from exc

        if response.status_code == 200 and result.valid:
            return result
        if response.status_code == PolicyViolation.status_code and not result.valid:
            return result

        raise VerificationUnavailableError(f"HTTP {response.status_code}: {result.error}")

    def _verify_locally(self, file: DocumentFile, destination: str) -> VerificationResult:
        try:
            return self._fallback.validate(file.filename, file.content_type, file.size, destination)
        except Exception:  # noqa: BLE001
            logger.exception("Local validation failed for '%s'.", file.filename)
            return VerificationResult.failure(GENERIC_USER_MESSAGE)


# ── Module-level singleton ─────────────────────────────────────────────────────
# Application code calls verify(); tests construct DocumentVerifier directly.

document_verifier = DocumentVerifier()


async def verify(file: DocumentFile, destination: str = DEFAULT_DESTINATION) -> VerificationResult:
    """Verify a document through the service when available, else locally."""
    return await document_verifier.verify(file, destination)
