"""
app/api/verify_controller.py

Handles incoming requests to POST /document-verify/ (also served without the
trailing slash).

This layer is responsible only for HTTP concerns:
  - Choosing the request mode from the Content-Type header:
      multipart/form-data → full-content verification of the 'file' field
      application/json    → metadata-only verification
  - Rejecting malformed bodies and missing / mistyped fields with a
    structural error that is never confused with a policy judgment.
  - Delegating the checks to VerificationService.
  - Wrapping every outcome in the {valid, error?, details?} envelope.

Responses:
  200  The file passed every check.  Body carries 'details'.
  422  The file was rejected by a policy check (extension, MIME, size,
       signature, suspicious content or destination).
  400  The request body was malformed or a required field was missing.
  405  Any method other than POST / OPTIONS.
  415  The request was neither multipart/form-data nor application/json.
  500  An unexpected error occurred; details are logged, never returned.
"""

from __future__ import annotations

from typing import Tuple

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from starlette.datastructures import UploadFile as StarletteUploadFile

from app.api.middleware.cors import CORS_HEADERS
from app.core.constants import (
    DEFAULT_DESTINATION,
    INTERNAL_ERROR_MESSAGE,
    SCAN_WINDOW_BYTES,
    UNSUPPORTED_MEDIA_MESSAGE,
)
from app.core.exceptions import InternalVerificationError, PolicyViolation, ProtocolError
from app.core.logger import get_logger
from app.models.verification_models import (
    ContentUpload,
    MetadataPayload,
    UploadRequest,
    VerificationResult,
)
from app.policy.table import MAX_SIGNATURE_LENGTH
from app.services.verification_service import verification_service

logger = get_logger(__name__)

router = APIRouter(prefix="/document-verify", tags=["Verification"])

REQUIRED_FIELDS_MESSAGE = (
    "Missing or invalid required fields: filename (string), contentType (string), "
    "size (number), bucket (string)"
)
SIGNATURE_FIELD_MESSAGE = "fileSignature must be an array of byte values (0-255)"

_HEAD_BYTES = max(SCAN_WINDOW_BYTES, MAX_SIGNATURE_LENGTH)
_READ_CHUNK = 64 * 1024


# ── Helpers ────────────────────────────────────────────────────────────────────

def _envelope(result: VerificationResult, status: int) -> JSONResponse:
    """Return the verification envelope with CORS headers attached."""
    return JSONResponse(status_code=status, content=result.to_envelope(), headers=CORS_HEADERS)


def _err(message: str, status: int) -> JSONResponse:
    return _envelope(VerificationResult.failure(message), status)


def _internal_error(fault: InternalVerificationError) -> JSONResponse:
    """Log the wrapped fault server-side; the caller only sees the generic message."""
    logger.error("%s", fault, exc_info=fault.__cause__)
    return _err(INTERNAL_ERROR_MESSAGE, fault.status_code)


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


async def _read_head(upload: StarletteUploadFile) -> Tuple[bytes, int]:
    """
    Read only the leading bytes needed by the signature and content checks.

    Returns ``(head, total_size)``.  The total comes from the spooled upload
    when Starlette recorded it, otherwise the rest is counted in chunks
    without being kept.
    """
    head = await upload.read(_HEAD_BYTES)
    if upload.size is not None:
        return head, upload.size

    size = len(head)
    while True:
        chunk = await upload.read(_READ_CHUNK)
        if not chunk:
            break
        size += len(chunk)
    return head, size


async def _parse_multipart(request: Request) -> ContentUpload:
    try:
        form = await request.form()
    except Exception as exc:  # noqa: BLE001
        raise ProtocolError("Invalid multipart/form-data payload.") from exc

    try:
        upload = form.get("file")
        if not isinstance(upload, StarletteUploadFile):
            raise ProtocolError("No file provided")

        bucket = form.get("bucket") or DEFAULT_DESTINATION
        if not isinstance(bucket, str):
            raise ProtocolError("'bucket' must be a text field.")

        head, size = await _read_head(upload)
    finally:
        await form.close()

    return ContentUpload(
        filename=upload.filename or "",
        content_type=upload.content_type or "",
        size=size,
        destination=bucket,
        head=head,
    )


async def _parse_json(request: Request) -> UploadRequest:
    try:
        body = await request.json()
    except ValueError as exc:
        raise ProtocolError("Invalid JSON payload") from exc

    if not isinstance(body, dict):
        raise ProtocolError("Request body must be a JSON object")

    try:
        payload = MetadataPayload.model_validate(body)
    except ValidationError as exc:
        bad_fields = {err["loc"][0] for err in exc.errors() if err["loc"]}
        if bad_fields == {"fileSignature"}:
            raise ProtocolError(SIGNATURE_FIELD_MESSAGE) from exc
        raise ProtocolError(REQUIRED_FIELDS_MESSAGE) from exc

    return payload.to_upload()


async def _parse_request(request: Request) -> UploadRequest:
    """Build the request variant for this call, or raise ProtocolError."""
    media_type = _media_type(request)
    if media_type == "multipart/form-data":
        return await _parse_multipart(request)
    if media_type == "application/json":
        return await _parse_json(request)
    raise ProtocolError(UNSUPPORTED_MEDIA_MESSAGE, status_code=415)


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post("/", response_model=VerificationResult, summary="Verify an applicant document")
@router.post("", include_in_schema=False)
async def verify_document(request: Request) -> JSONResponse:
    """
    Accept one of:
      • A file upload      → -F "file=@cv.pdf" [-F "bucket=resumes"]
      • File metadata JSON → {"filename", "contentType", "size", "bucket",
                              "fileSignature"?}

    Always answers with the verification envelope.
    """
    # ── 1. Parse into one request variant ──────────────────────────────────────
    try:
        upload = await _parse_request(request)
    except ProtocolError as exc:
        logger.warning("Verification request rejected — %s", exc)
        return _err(str(exc), exc.status_code)
    except Exception as exc:  # noqa: BLE001
        fault = InternalVerificationError(f"Unexpected error while reading verification request: {exc!r}")
        fault.__cause__ = exc
        return _internal_error(fault)

    logger.info(
        "Verification request received — %s mode, '%s' (%d bytes) → '%s'",
        upload.mode,
        upload.filename,
        upload.size,
        upload.destination,
    )

    # ── 2. Run the pipeline ────────────────────────────────────────────────────
    try:
        result = verification_service.verify(upload)
    except Exception as exc:  # noqa: BLE001
        fault = InternalVerificationError(
            f"Unexpected error during verification of '{upload.filename}': {exc!r}"
        )
        fault.__cause__ = exc
        return _internal_error(fault)

    return _envelope(result, 200 if result.valid else PolicyViolation.status_code)


@router.options("/", include_in_schema=False)
@router.options("", include_in_schema=False)
async def verify_document_preflight() -> Response:
    """Bare OPTIONS calls; browser preflights are answered by CORSMiddleware."""
    return Response(status_code=204, headers=CORS_HEADERS)
