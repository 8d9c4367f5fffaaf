"""Deep estimator: the accurate, slower pass that supersedes the fast quote.

PDF path
--------
Every page is opened through the PDF backend, in document order:

    words > 0  → tier from the word-count table
    words == 0 → operation list inspected:
                 any image / path / fill / stroke operation, or more than
                 50 operations in total → "scanned"; otherwise "blank"

A document that cannot be opened yields one dense page.  A single page that
fails is priced as dense on its own, so total_pages still reflects the real
page count.

Image and DOCX uploads use the same handlers as the fast pass.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from pagequote.analysis.docx_estimator import estimate_docx
from pagequote.analysis.pdf_backend import PdfBackend, PdfPage, get_pdf_backend
from pagequote.analysis.pricing import (
    build_result,
    check_base_price,
    classify_word_count,
    estimate_image,
    fallback_result,
    make_page,
)
from pagequote.analysis.sniffer import resolve_kind
from pagequote.analysis.types import AnalysisResult, DensityTier, FileKind, PageResult
from pagequote.core.constants import (
    ASSUMED_WORDS_PER_PAGE,
    GRAPHICS_OP_THRESHOLD,
    GRAPHICS_OPS,
)

logger = logging.getLogger(__name__)


def has_visual_content(operations: list[str]) -> bool:
    """Return True if a text-less page still draws something."""
    if len(operations) > GRAPHICS_OP_THRESHOLD:
        return True
    return any(op in GRAPHICS_OPS for op in operations)


def classify_pdf_page(page: PdfPage) -> tuple[DensityTier, int]:
    """Return (density, word_count) for one backend page."""
    word_count = len(page.get_text().split())
    if word_count > 0:
        return classify_word_count(word_count), word_count
    if has_visual_content(page.get_operation_list()):
        return DensityTier.SCANNED, 0
    return DensityTier.BLANK, 0


def estimate_pdf_deep(
    buffer: bytes,
    base_price_per_page: float,
    file_type: FileKind = FileKind.PDF,
    backend: PdfBackend | None = None,
) -> AnalysisResult:
    """Parse every page of a PDF and price it by its real density."""
    backend = backend or get_pdf_backend()
    try:
        doc = backend.open(buffer)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Deep PDF analysis could not open document: %s", exc)
        return fallback_result(base_price_per_page, file_type, "deep")

    with doc:
        try:
            page_count = doc.page_count
        except Exception as exc:  # noqa: BLE001
            logger.warning("Deep PDF analysis could not read page tree: %s", exc)
            return fallback_result(base_price_per_page, file_type, "deep")
        if page_count < 1:
            logger.warning("Deep PDF analysis found no pages; assuming one dense page")
            return fallback_result(base_price_per_page, file_type, "deep")

        pages: list[PageResult] = []
        failed = 0
        for index in range(page_count):
            page_number = index + 1
            try:
                density, word_count = classify_pdf_page(doc.page(index))
            except Exception as exc:  # noqa: BLE001
                # One unreadable page must not discard the others
                logger.warning("Deep PDF analysis failed on page %d: %s", page_number, exc)
                density, word_count = DensityTier.HIGH, ASSUMED_WORDS_PER_PAGE
                failed += 1
            pages.append(make_page(page_number, density, word_count, base_price_per_page))

    if failed:
        logger.info("Deep PDF analysis priced %d of %d page(s) as dense fallback", failed, page_count)
    return build_result(pages, is_image=False, file_type=file_type, phase="deep")


def deep_estimate(
    buffer: bytes,
    file_name: str,
    base_price_per_page: float,
    backend: PdfBackend | None = None,
) -> AnalysisResult:
    """Return the authoritative AnalysisResult for an upload.

    *backend* defaults to the shared PyMuPDF backend; tests inject fakes.
    Raises ValueError only for a negative or non-finite base price.
    """
    check_base_price(base_price_per_page)
    kind = resolve_kind(file_name, buffer)
    handlers: dict[FileKind, Callable[[bytes, float], AnalysisResult]] = {
        FileKind.PDF: lambda buf, base: estimate_pdf_deep(buf, base, FileKind.PDF, backend),
        FileKind.IMAGE: estimate_image,
        FileKind.DOCX: estimate_docx,
        FileKind.UNKNOWN: lambda buf, base: estimate_pdf_deep(buf, base, FileKind.UNKNOWN, backend),
    }
    result = handlers[kind](buffer, base_price_per_page)
    logger.debug(
        "Deep pass: kind=%s pages=%d total=%.2f", kind.value, result.total_pages, result.total_price
    )
    return result
