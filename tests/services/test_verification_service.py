"""
tests/services/test_verification_service.py

Unit tests for VerificationService — both request variants, the fixed
check order and short-circuiting on the first failure.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from app.core.constants import SCAN_WINDOW_BYTES
from app.models.verification_models import ContentUpload, MetadataUpload, VerificationResult
from app.policy import POLICY_TABLE
from app.services.verification_service import VerificationService

DOCUMENT_CAP = POLICY_TABLE["pdf"].max_size_bytes


# ── Helpers ────────────────────────────────────────────────────────────────────

def _content(
    filename: str = "resume.pdf",
    content_type: str = "application/pdf",
    data: bytes = b"%PDF-1.7\n%%EOF\n",
    destination: str = "resumes",
    size: int | None = None,
) -> ContentUpload:
    return ContentUpload(
        filename=filename,
        content_type=content_type,
        size=len(data) if size is None else size,
        destination=destination,
        head=data,
    )


def _metadata(
    filename: str = "resume.pdf",
    content_type: str = "application/pdf",
    size: int = 2048,
    destination: str = "resumes",
    sample: bytes | None = None,
) -> MetadataUpload:
    return MetadataUpload(
        filename=filename,
        content_type=content_type,
        size=size,
        destination=destination,
        signature_sample=sample,
    )


@pytest.fixture
def service() -> VerificationService:
    return VerificationService()


# ── Full-content mode ──────────────────────────────────────────────────────────

class TestVerifyContent:

    def test_every_supported_type_passes(self, service, sample_files) -> None:
        for extension, (filename, mime, data) in sample_files.items():
            result = service.verify(_content(filename, mime, data))

            assert result.valid, (extension, result.error)
            assert result.error is None
            assert result.details.extension == extension
            assert result.details.signature_valid is True

    def test_details_describe_the_file(self, service, sample_pdf_bytes) -> None:
        result = service.verify(_content(data=sample_pdf_bytes))

        assert result.details.filename == "resume.pdf"
        assert result.details.content_type == "application/pdf"
        assert result.details.size == len(sample_pdf_bytes)
        assert result.details.size_formatted.endswith("Bytes")

    def test_extension_not_in_table_is_rejected(self, service) -> None:
        result = service.verify(_content("resume.exe", "application/pdf", b"%PDF-1.7"))

        assert not result.valid
        assert "'.exe' is not allowed" in result.error
        assert result.details is None

    def test_mime_of_other_type_rejected_before_signature(self, service, sample_files) -> None:
        """An image MIME on a .pdf name fails at MIME consistency; bytes are never looked at."""
        with patch("app.services.verification_service.check_signature") as check_signature:
            result = service.verify(_content("resume.pdf", "image/png", sample_files["png"][2]))

        assert not result.valid
        assert "Content type 'image/png' does not match file extension '.pdf'" == result.error
        check_signature.assert_not_called()

    def test_text_renamed_to_pdf_fails_signature(self, service) -> None:
        result = service.verify(_content(data=b"Plain text resume, honestly a PDF."))

        assert not result.valid
        assert "does not match expected format for '.pdf'" in result.error

    @pytest.mark.parametrize("extension", list(POLICY_TABLE))
    def test_truncated_content_fails_signature(self, service, sample_files, extension) -> None:
        filename, mime, data = sample_files[extension]
        shortest = min(len(sig) for sig in POLICY_TABLE[extension].signatures)

        result = service.verify(_content(filename, mime, data[: shortest - 1]))

        assert not result.valid
        assert "does not match expected format" in result.error

    def test_empty_file_is_reported_as_empty(self, service) -> None:
        result = service.verify(_content(data=b""))

        assert result.error == "File is empty"

    def test_exactly_at_cap_passes(self, service, sample_pdf_bytes) -> None:
        result = service.verify(_content(data=sample_pdf_bytes, size=DOCUMENT_CAP))

        assert result.valid
        assert result.details.size_formatted == "5 MB"

    def test_one_byte_over_cap_fails(self, service, sample_pdf_bytes) -> None:
        result = service.verify(_content(data=sample_pdf_bytes, size=DOCUMENT_CAP + 1))

        assert not result.valid
        assert "exceeds maximum allowed size" in result.error

    def test_suspicious_content_rejected_even_with_valid_signature(self, service) -> None:
        data = b"%PDF-1.7\n/JS (<script>fetch('//x')</script>)\n"

        result = service.verify(_content(data=data))

        assert not result.valid
        assert result.error == "File contains potentially malicious content"

    def test_suspicious_content_after_window_is_accepted(self, service) -> None:
        data = b"%PDF-1.7\n" + b"0" * SCAN_WINDOW_BYTES + b"<script>alert(1)</script>"

        result = service.verify(_content(data=data))

        assert result.valid

    def test_disallowed_destination(self, service, sample_pdf_bytes) -> None:
        result = service.verify(_content(data=sample_pdf_bytes, destination="avatars"))

        assert result.error == "Upload to bucket 'avatars' is not allowed"

    def test_first_failure_wins(self, service) -> None:
        """Bad extension, empty, bad bytes, bad bucket → only the extension is reported."""
        result = service.verify(_content("x.exe", "text/plain", b"", destination="nope"))

        assert "is not allowed. Allowed types" in result.error

    def test_signature_checked_before_content_scan(self, service) -> None:
        result = service.verify(_content(data=b"<script>alert(1)</script>"))

        assert "does not match expected format" in result.error


# ── Metadata-only mode ─────────────────────────────────────────────────────────

class TestVerifyMetadata:

    def test_without_sample_signature_is_assumed(self, service) -> None:
        result = service.verify(_metadata())

        assert result.valid
        assert result.details.signature_valid is True
        assert result.details.size_formatted == "2 KB"

    def test_empty_sample_is_treated_as_absent(self, service) -> None:
        assert service.verify(_metadata(sample=b"")).valid

    def test_matching_sample_passes(self, service) -> None:
        assert service.verify(_metadata(sample=b"%PDF-1.4")).valid

    def test_mismatching_sample_fails(self, service) -> None:
        result = service.verify(_metadata(sample=b"MZ\x90\x00\x03\x00\x00\x00"))

        assert not result.valid
        assert "does not match expected format for '.pdf'" in result.error

    def test_sample_shorter_than_signature_fails(self, service) -> None:
        assert not service.verify(_metadata(sample=b"%P")).valid

    def test_content_scan_never_runs(self, service) -> None:
        """The sample is not scanned; only full uploads are."""
        with patch("app.services.verification_service.check_content") as check_content:
            result = service.verify(_metadata(sample=b"%PDF<script>"))

        assert result.valid
        check_content.assert_not_called()

    def test_zero_size(self, service) -> None:
        assert service.verify(_metadata(size=0)).error == "File is empty"

    def test_disallowed_destination(self, service) -> None:
        assert not service.verify(_metadata(destination="public")).valid


class TestDispatch:

    def test_unknown_request_type_raises(self, service) -> None:
        with pytest.raises(TypeError):
            service.verify(object())  # type: ignore[arg-type]

    def test_result_envelope_shape(self, service, sample_pdf_bytes) -> None:
        envelope = service.verify(_content(data=sample_pdf_bytes)).to_envelope()

        assert set(envelope) == {"valid", "details"}
        assert set(envelope["details"]) == {
            "filename", "extension", "contentType", "size", "sizeFormatted", "signatureValid",
        }

    def test_failure_envelope_has_no_details(self, service) -> None:
        envelope = service.verify(_content(data=b"")).to_envelope()

        assert envelope == {"valid": False, "error": "File is empty"}

    def test_envelope_rejects_inconsistent_state(self) -> None:
        with pytest.raises(ValueError):
            VerificationResult(valid=True)
        with pytest.raises(ValueError):
            VerificationResult(valid=False)
