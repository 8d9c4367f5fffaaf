"""Cross-cutting properties every AnalysisResult must satisfy.

For every handler, pass and base price:
  - pages non-empty, numbered exactly 1..total_pages
  - page.price == base × fraction(page.density)
  - total_price == sum(page.price)
  - original_total_price == total_price at creation
"""
from __future__ import annotations

import io

import docx
import fitz
import pytest

from pagequote.analysis.deep import deep_estimate
from pagequote.analysis.fast import fast_estimate
from pagequote.analysis.pricing import tier_fraction


def _real_pdf() -> bytes:
    doc = fitz.open()
    doc.new_page().insert_text((36, 36), "short page", fontsize=9)
    doc.new_page()
    doc.new_page().draw_circle((100, 100), 40)
    buffer = doc.tobytes()
    doc.close()
    return buffer


def _real_docx() -> bytes:
    document = docx.Document()
    document.add_paragraph(" ".join(["texto"] * 700))
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


_CASES = [
    (_real_pdf(), "real.pdf"),
    (b"%PDF-1.4 /Count 11", "tail.pdf"),
    (b"no markers here", "plain.pdf"),
    (b"%PDF /Count 999999", "clamped.pdf"),
    (b"\x89PNG\r\n\x1a\n", "photo.png"),
    (b"anything", "photo.jpg"),
    (_real_docx(), "contract.docx"),
    (b"PK\x03\x04broken", "broken.docx"),
    (b"", "empty.pdf"),
    (b"????", "upload"),
]


@pytest.mark.parametrize("estimate", [fast_estimate, deep_estimate], ids=["fast", "deep"])
@pytest.mark.parametrize("buffer, name", _CASES, ids=[name for _, name in _CASES])
@pytest.mark.parametrize("base", [0.0, 9.0, 33.3])
def test_result_invariants(estimate, buffer, name, base):
    result = estimate(buffer, name, base)

    assert result.pages
    assert result.total_pages == len(result.pages)
    assert [p.page_number for p in result.pages] == list(range(1, result.total_pages + 1))
    for page in result.pages:
        assert page.price == base * tier_fraction(page.density)
        assert page.fraction == tier_fraction(page.density)
        assert page.included is True
        assert page.word_count >= 0
    assert result.total_price == pytest.approx(sum(p.price for p in result.pages))
    assert result.original_total_price == result.total_price


def test_real_pdf_fast_and_deep_agree_on_page_count():
    buffer = _real_pdf()
    assert fast_estimate(buffer, "x.pdf", 1.0).total_pages == 3
    assert deep_estimate(buffer, "x.pdf", 1.0).total_pages == 3
