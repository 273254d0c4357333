"""
app/policy/table.py

The file-type Policy Table: extension → allowed MIME types, size cap and
magic-byte signature alternatives.

The table is built once at import time and exposed as a read-only mapping
of frozen dataclasses.  The verification service and the fallback
validator both import ``POLICY_TABLE`` from here, so the two paths can
never disagree about what a given extension allows.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

_KB = 1024
_MB = 1024 * 1024

DOCUMENT_MAX_BYTES: int = 5 * _MB
IMAGE_MAX_BYTES: int = 10 * _MB

_DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# Leading bytes identifying each on-disk format.
PDF_HEADER = b"%PDF"                  # 25 50 44 46
OLE_HEADER = b"\xd0\xcf\x11\xe0"      # legacy compound document (.doc)
ZIP_HEADER = b"PK\x03\x04"            # ZIP local-file header (.docx)
JPEG_SOI = b"\xff\xd8\xff"            # start-of-image marker
PNG_HEADER = b"\x89PNG"               # 89 50 4E 47


@dataclass(frozen=True)
class FileTypePolicy:
    """
    What a single extension is allowed to be.

    ``signatures`` may be empty, meaning no magic-byte check is performed
    for the type.  ``mime_types`` always holds at least one entry.
    """

    mime_types: frozenset
    max_size_bytes: int
    signatures: Tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        if not self.mime_types:
            raise ValueError("A file type policy needs at least one MIME type.")
        if self.max_size_bytes <= 0:
            raise ValueError("max_size_bytes must be positive.")

    def accepts_mime(self, content_type: str) -> bool:
        return content_type.lower() in self.mime_types

    @property
    def longest_signature(self) -> int:
        return max((len(sig) for sig in self.signatures), default=0)


def _policy(mimes: Tuple[str, ...], max_size: int, *signatures: bytes) -> FileTypePolicy:
    return FileTypePolicy(
        mime_types=frozenset(m.lower() for m in mimes),
        max_size_bytes=max_size,
        signatures=tuple(signatures),
    )


POLICY_TABLE: Mapping[str, FileTypePolicy] = MappingProxyType({
    # Documents
    "pdf": _policy(("application/pdf",), DOCUMENT_MAX_BYTES, PDF_HEADER),
    "doc": _policy(("application/msword",), DOCUMENT_MAX_BYTES, OLE_HEADER),
    "docx": _policy((_DOCX_MIME,), DOCUMENT_MAX_BYTES, ZIP_HEADER),
    # Images (scanned certificates, ID photos)
    "jpg": _policy(("image/jpeg",), IMAGE_MAX_BYTES, JPEG_SOI),
    "jpeg": _policy(("image/jpeg",), IMAGE_MAX_BYTES, JPEG_SOI),
    "png": _policy(("image/png",), IMAGE_MAX_BYTES, PNG_HEADER),
})

#: Extensions in table order, used in rejection messages.
ALLOWED_EXTENSIONS: Tuple[str, ...] = tuple(POLICY_TABLE)

#: Bytes a caller must read to let every configured signature be compared.
MAX_SIGNATURE_LENGTH: int = max(p.longest_signature for p in POLICY_TABLE.values())


def get_policy(extension: str) -> Optional[FileTypePolicy]:
    """Return the policy for a lowercase extension, or None when not allowed."""
    return POLICY_TABLE.get(extension)


def format_bytes(size: int) -> str:
    """
    Human-readable size using 1024-based units.

    At most two decimals are kept and trailing zeros dropped, so
    5 MiB renders as ``"5 MB"`` and 2 411 724 bytes as ``"2.3 MB"``.

    >>> format_bytes(0)
    '0 Bytes'
    >>> format_bytes(1536)
    '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"

    units = ("Bytes", "KB", "MB", "GB")
    value = float(size)
    index = 0
    while value >= _KB and index < len(units) - 1:
        value /= _KB
        index += 1

    return f"{round(value, 2):g} {units[index]}"
