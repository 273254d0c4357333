"""app/client/__init__.py — public API of the client package."""

from app.client.verifier import DocumentFile, DocumentVerifier, document_verifier, verify

__all__ = [
    "DocumentFile",
    "DocumentVerifier",
    "document_verifier",
    "verify",
]
