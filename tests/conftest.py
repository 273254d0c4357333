"""
tests/conftest.py

Shared pytest fixtures available to all test modules.

Fixtures defined here are auto-discovered by pytest — no import needed.
"""

from typing import Dict, Tuple

import pytest
from fastapi.testclient import TestClient

from app.main import app

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


# ── Core client fixture ────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    A synchronous TestClient wrapping the FastAPI app.

    session-scoped so the app is instantiated once per test run.
    Server exceptions become 500 responses instead of propagating.
    """
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


# ── Sample file fixtures ───────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def sample_files() -> Dict[str, Tuple[str, str, bytes]]:
    """
    One minimal, well-formed file per supported extension:
    ``{extension: (filename, content_type, content)}``.

    Only the leading bytes are realistic; nothing downstream parses them.
    """
    jpeg = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x00" * 32 + b"\xff\xd9"
    return {
        "pdf": (
            "resume.pdf",
            "application/pdf",
            b"%PDF-1.7\n1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\ntrailer\n%%EOF\n",
        ),
        "doc": (
            "cover-letter.doc",
            "application/msword",
            b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 504,
        ),
        "docx": (
            "resume.docx",
            DOCX_MIME,
            b"PK\x03\x04\x14\x00\x06\x00\x08\x00" + b"\x00" * 20 + b"[Content_Types].xml",
        ),
        "jpg": ("headshot.jpg", "image/jpeg", jpeg),
        "jpeg": ("certificate.jpeg", "image/jpeg", jpeg),
        "png": (
            "certificate.png",
            "image/png",
            b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00",
        ),
    }


@pytest.fixture
def sample_pdf_bytes(sample_files) -> bytes:
    return sample_files["pdf"][2]
