"""DOCX estimator shared by the fast and deep passes.

There is no cheaper heuristic for Office XML than counting its words, so
both passes run this same function and always agree.

Algorithm
---------
1. Get the WordprocessingML body: python-docx for ZIP packages, a
   non-strict UTF-8 decode of the raw bytes for flat XML.
2. Collect every ``<w:t ...>text</w:t>`` run, strip leftover tags, and
   split the joined text on whitespace.
3. pages = max(1, ceil(words / 250)).
4. Spread the words uniformly: words_per_page = round(words / pages),
   half rounding up, and classify every page with that count.

DOCX has no page boundaries without a layout engine; the uniform split is
an accepted approximation.  Any failure yields one dense page.
"""
from __future__ import annotations

import io
import logging
import math
import re

import docx

from pagequote.analysis.pricing import (
    build_result,
    classify_word_count,
    fallback_result,
    uniform_pages,
)
from pagequote.analysis.types import AnalysisResult, FileKind
from pagequote.core.constants import DOCX_WORDS_PER_PAGE

logger = logging.getLogger(__name__)

_TEXT_RUN_RE = re.compile(r"<w:t[^>]*>([^<]*)</w:t>")
_TAG_RE = re.compile(r"<[^>]+>")

_ZIP_MAGIC = b"PK\x03\x04"


def _body_xml(buffer: bytes) -> str:
    """Return the document body XML of a DOCX package or flat XML buffer."""
    if bytes(buffer[:4]) == _ZIP_MAGIC:
        document = docx.Document(io.BytesIO(buffer))
        return document.element.xml
    return bytes(buffer).decode("utf-8", errors="replace")


def extract_words(xml: str) -> list[str]:
    """Return the whitespace-delimited words of every text run in *xml*."""
    runs = (_TAG_RE.sub("", m.group(0)).strip() for m in _TEXT_RUN_RE.finditer(xml))
    return " ".join(run for run in runs if run).split()


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def estimate_docx(buffer: bytes, base_price_per_page: float) -> AnalysisResult:
    """Estimate pages and density of a DOCX upload.

    Never raises for unreadable content; a corrupt package is priced as a
    single dense page.
    """
    try:
        word_count = len(extract_words(_body_xml(buffer)))
        page_count = max(1, math.ceil(word_count / DOCX_WORDS_PER_PAGE))
        words_per_page = _round_half_up(word_count / page_count)
        pages = uniform_pages(
            page_count,
            classify_word_count(words_per_page),
            words_per_page,
            base_price_per_page,
        )
        return build_result(pages, is_image=False, file_type=FileKind.DOCX, phase="deep")
    except Exception as exc:  # noqa: BLE001
        # Unreadable packages must still produce a price
        logger.warning("DOCX analysis failed, assuming one dense page: %s", exc)
        return fallback_result(base_price_per_page, FileKind.DOCX, "deep")
