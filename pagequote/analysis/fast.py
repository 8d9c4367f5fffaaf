"""Fast estimator: an instant, approximate quote.

PDF path
--------
Never renders or parses the document.  The trailing 32 KiB are decoded as
Latin-1 (PDF structural keywords are ASCII) and searched for page-tree
``/Count <n>`` markers; the largest value wins.  Linearized files often
keep the page tree near the front, so a miss in the tail triggers one scan
of the whole buffer.  No marker at all means one page.  The count is
clamped to [1, 5000] and every page is priced as dense ("high", 300 words).

Taking the maximum is a heuristic: nested page trees carry their own
``/Count`` and the root is normally the largest.  The deep pass is
authoritative.

Image and DOCX uploads use the same handlers as the deep pass.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable

from pagequote.analysis.docx_estimator import estimate_docx
from pagequote.analysis.pricing import (
    build_result,
    check_base_price,
    estimate_image,
    uniform_pages,
)
from pagequote.analysis.sniffer import resolve_kind
from pagequote.analysis.types import AnalysisResult, DensityTier, FileKind
from pagequote.core.constants import (
    ASSUMED_WORDS_PER_PAGE,
    FAST_TAIL_BYTES,
    MAX_PAGES,
    MIN_PAGES,
)

logger = logging.getLogger(__name__)

_COUNT_RE = re.compile(r"/Count\s+(\d+)")


def _max_count(text: str) -> int | None:
    counts = [int(m.group(1)) for m in _COUNT_RE.finditer(text)]
    return max(counts) if counts else None


def scan_page_count(buffer: bytes) -> int:
    """Estimate a PDF's page count from its ``/Count`` markers.

    Scans the tail first, then the whole buffer, and clamps the result to
    [MIN_PAGES, MAX_PAGES].  Returns MIN_PAGES when no marker exists.
    """
    tail = bytes(buffer[-FAST_TAIL_BYTES:]).decode("latin-1")
    count = _max_count(tail)
    if count is None and len(buffer) > FAST_TAIL_BYTES:
        count = _max_count(bytes(buffer).decode("latin-1"))
    if count is None:
        return MIN_PAGES
    return max(MIN_PAGES, min(MAX_PAGES, count))


def estimate_pdf_fast(
    buffer: bytes,
    base_price_per_page: float,
    file_type: FileKind = FileKind.PDF,
) -> AnalysisResult:
    """Price every page of a PDF as dense, using the scanned page count."""
    count = scan_page_count(buffer)
    pages = uniform_pages(count, DensityTier.HIGH, ASSUMED_WORDS_PER_PAGE, base_price_per_page)
    return build_result(pages, is_image=False, file_type=file_type, phase="fast")


_HANDLERS: dict[FileKind, Callable[[bytes, float], AnalysisResult]] = {
    FileKind.PDF: estimate_pdf_fast,
    FileKind.IMAGE: estimate_image,
    FileKind.DOCX: estimate_docx,
    FileKind.UNKNOWN: lambda buffer, base: estimate_pdf_fast(buffer, base, FileKind.UNKNOWN),
}


def fast_estimate(buffer: bytes, file_name: str, base_price_per_page: float) -> AnalysisResult:
    """Return the immediate, approximate AnalysisResult for an upload.

    Runs in time bounded by one tail decode plus one full-buffer decode.
    Raises ValueError only for a negative or non-finite base price.
    """
    check_base_price(base_price_per_page)
    kind = resolve_kind(file_name, buffer)
    result = _HANDLERS[kind](buffer, base_price_per_page)
    logger.debug(
        "Fast pass: kind=%s pages=%d total=%.2f", kind.value, result.total_pages, result.total_price
    )
    return result
