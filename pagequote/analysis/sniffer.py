"""Format sniffer: decide which estimator handles an upload.

The file name decides first.  Matching is on the trailing extension,
case-insensitive:

    jpg jpeg png gif webp tiff tif → image
    docx                           → docx
    anything else                  → pdf

Unknown extensions deliberately go down the PDF path; the byte-level
estimators soft-fail on content they cannot read.  Only names without any
extension are sniffed by magic number, and bytes that match nothing are
reported as "unknown" (still estimated as a PDF).
"""
from __future__ import annotations

from pathlib import PurePath

from pagequote.analysis.types import FileKind
from pagequote.core.constants import DOCX_EXTENSIONS, IMAGE_EXTENSIONS

# Magic-number prefix → kind.  RIFF is narrowed to WEBP in sniff_bytes().
_MAGIC_NUMBERS: list[tuple[bytes, FileKind]] = [
    (b"%PDF-", FileKind.PDF),
    (b"PK\x03\x04", FileKind.DOCX),
    (b"\x89PNG\r\n\x1a\n", FileKind.IMAGE),
    (b"\xff\xd8\xff", FileKind.IMAGE),
    (b"GIF87a", FileKind.IMAGE),
    (b"GIF89a", FileKind.IMAGE),
    (b"II*\x00", FileKind.IMAGE),
    (b"MM\x00*", FileKind.IMAGE),
]

# PDF headers may be preceded by junk; readers accept it within the first 1 KiB.
_PDF_HEADER_WINDOW = 1024


def _extension(file_name: str) -> str:
    return PurePath(file_name).suffix.lstrip(".").lower()


def classify(file_name: str) -> FileKind:
    """Return the FileKind implied by *file_name*'s extension.

    Never returns FileKind.UNKNOWN: unrecognised extensions map to PDF.
    """
    ext = _extension(file_name)
    if ext in IMAGE_EXTENSIONS:
        return FileKind.IMAGE
    if ext in DOCX_EXTENSIONS:
        return FileKind.DOCX
    return FileKind.PDF


def sniff_bytes(buffer: bytes) -> FileKind:
    """Return the FileKind implied by the leading bytes of *buffer*."""
    head = bytes(buffer[:_PDF_HEADER_WINDOW])
    for magic, kind in _MAGIC_NUMBERS:
        if head.startswith(magic):
            return kind
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return FileKind.IMAGE
    if b"%PDF-" in head:
        return FileKind.PDF
    return FileKind.UNKNOWN


def resolve_kind(file_name: str, buffer: bytes) -> FileKind:
    """Pick the handler kind for an upload.

    The extension wins whenever there is one; only extension-less names
    are sniffed by content.
    """
    if _extension(file_name):
        return classify(file_name)
    return sniff_bytes(buffer)
