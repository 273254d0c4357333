"""
app/models/verification_models.py

Pydantic DTOs for the verification flow.

Two request variants form a tagged union on ``mode``; the controller builds
exactly one of them per HTTP request and the service dispatches on it once:

    ContentUpload   multipart upload — leading bytes + true size are known
    MetadataUpload  JSON metadata    — optional short signature sample only

``MetadataPayload`` is the wire shape of the JSON body and is only used to
validate it.  ``VerificationResult`` is the envelope every path returns.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

ByteValue = Annotated[StrictInt, Field(ge=0, le=255)]


# ── Request variants ───────────────────────────────────────────────────────────

class ContentUpload(BaseModel):
    """
    Full-content request.

    ``head`` holds the leading bytes of the file (at least the scan window
    and the longest signature, or the whole file when it is smaller);
    ``size`` is the true total size of the upload.
    """

    model_config = ConfigDict(frozen=True)

    mode: Literal["content"] = "content"
    filename: str
    content_type: str
    size: int
    destination: str
    head: bytes


class MetadataUpload(BaseModel):
    """Metadata-only request; ``signature_sample`` may be absent or empty."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["metadata"] = "metadata"
    filename: str
    content_type: str
    size: int
    destination: str
    signature_sample: Optional[bytes] = None


UploadRequest = Annotated[Union[ContentUpload, MetadataUpload], Field(discriminator="mode")]


class MetadataPayload(BaseModel):
    """
    JSON body for the metadata-only mode.

        {
            "filename": "cv.pdf",
            "contentType": "application/pdf",
            "size": 48213,
            "bucket": "resumes",
            "fileSignature": [37, 80, 68, 70, 45, 49, 46, 55]
        }

    Types are strict: ``"size": "12"`` or ``"size": true`` is a structural
    error, not something to coerce.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    filename: StrictStr
    content_type: StrictStr = Field(alias="contentType")
    size: Union[StrictInt, StrictFloat]
    bucket: StrictStr
    file_signature: Optional[List[ByteValue]] = Field(default=None, alias="fileSignature")

    @field_validator("size")
    @classmethod
    def size_must_be_whole(cls, v: Union[int, float]) -> Union[int, float]:
        if isinstance(v, bool):
            raise ValueError("size must be a number, not a boolean")
        if v < 0:
            raise ValueError("size must not be negative")
        if isinstance(v, float) and not v.is_integer():
            raise ValueError("size must be a whole number of bytes")
        return v

    def to_upload(self) -> MetadataUpload:
        sample = bytes(self.file_signature) if self.file_signature else None
        return MetadataUpload(
            filename=self.filename,
            content_type=self.content_type,
            size=int(self.size),
            destination=self.bucket,
            signature_sample=sample,
        )


# ── Envelope ───────────────────────────────────────────────────────────────────

class VerificationDetails(BaseModel):
    """Populated only for a successful verification."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    filename: str
    extension: str
    content_type: str
    size: int
    size_formatted: str
    signature_valid: bool


class VerificationResult(BaseModel):
    """
    The envelope shared by every verification path.

        { "valid": true,  "details": { ... } }
        { "valid": false, "error": "File is empty" }

    Exactly one of ``error`` / ``details`` is set, depending on ``valid``.
    """

    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    error: Optional[str] = None
    details: Optional[VerificationDetails] = None

    @model_validator(mode="after")
    def _exactly_one_of_error_or_details(self) -> "VerificationResult":
        if self.valid and (self.details is None or self.error is not None):
            raise ValueError("A valid result carries details and no error.")
        if not self.valid and (self.error is None or self.details is not None):
            raise ValueError("An invalid result carries an error and no details.")
        return self

    @classmethod
    def success(cls, details: VerificationDetails) -> "VerificationResult":
        return cls(valid=True, details=details)

    @classmethod
    def failure(cls, error: str) -> "VerificationResult":
        return cls(valid=False, error=error)

    def to_envelope(self) -> dict:
        """Wire form: camelCase keys, absent optionals omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
