"""Tests for the FastAPI routes.

Covers:
- POST /analysis/fast: /Count estimate, default and explicit base price
- POST /analysis/deep: real PDF parsed page by page
- request_id echoed back; generated when omitted
- invalid form data → 422 error envelope
- oversized uploads → 413
- POST /quotes: deep analysis plus urgency / notarization
"""
from __future__ import annotations

import fitz
import pytest

from pagequote.core.settings import get_settings


def _pdf(pages: int, words: int = 0) -> bytes:
    doc = fitz.open()
    for _ in range(pages):
        page = doc.new_page()
        if words:
            lines = [" ".join(["word"] * min(10, words - i)) for i in range(0, words, 10)]
            page.insert_text((36, 36), "\n".join(lines), fontsize=7)
    buffer = doc.tobytes()
    doc.close()
    return buffer


# ---------------------------------------------------------------------------
# /analysis
# ---------------------------------------------------------------------------

def test_fast_pass_uses_default_base_price(client):
    response = client.post(
        "/analysis/fast",
        files={"file": ("contract.pdf", b"%PDF-1.4 /Count 6 %%EOF", "application/pdf")},
        data={"request_id": "upload-1"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["kind"] == "fastPassDone"
    assert body["id"] == "upload-1"
    assert body["result"]["totalPages"] == 6
    assert body["result"]["totalPrice"] == 60.0
    assert body["result"]["phase"] == "fast"


def test_fast_pass_explicit_base_price(client):
    response = client.post(
        "/analysis/fast",
        files={"file": ("scan.png", b"\x89PNG\r\n\x1a\n", "image/png")},
        data={"base_price_per_page": "12.5"},
    )
    body = response.json()
    assert body["result"]["isImage"] is True
    assert body["result"]["totalPrice"] == 12.5
    assert body["id"]  # generated when not supplied


def test_deep_pass_real_pdf(client):
    response = client.post(
        "/analysis/deep",
        files={"file": ("letter.pdf", _pdf(2, words=120), "application/pdf")},
        data={"request_id": "deep-1"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["kind"] == "deepPassDone"
    assert body["id"] == "deep-1"
    pages = body["result"]["pages"]
    assert [p["density"] for p in pages] == ["medium", "medium"]
    assert [p["pageNumber"] for p in pages] == [1, 2]
    assert body["result"]["totalPrice"] == 10.0


def test_deep_pass_broken_pdf_still_answers(client):
    response = client.post(
        "/analysis/deep",
        files={"file": ("broken.pdf", b"garbage", "application/pdf")},
    )
    assert response.status_code == 200
    assert response.json()["result"]["totalPages"] == 1


def test_negative_base_price_is_error_envelope(client):
    response = client.post(
        "/analysis/fast",
        files={"file": ("a.pdf", b"/Count 2", "application/pdf")},
        data={"base_price_per_page": "-3", "request_id": "neg"},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["kind"] == "error"
    assert body["id"] == "neg"


def test_oversized_upload_rejected(client, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "16")
    get_settings.cache_clear()
    response = client.post(
        "/analysis/fast",
        files={"file": ("big.pdf", b"x" * 17, "application/pdf")},
    )
    assert response.status_code == 413


# ---------------------------------------------------------------------------
# /quotes
# ---------------------------------------------------------------------------

def test_quote_standard(client):
    response = client.post(
        "/quotes",
        files={"file": ("letter.pdf", _pdf(3, words=300), "application/pdf")},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["analysis"]["totalPages"] == 3
    assert body["analysis"]["phase"] == "deep"
    assert body["quote"]["subtotal"] == 30.0
    assert body["quote"]["total"] == 30.0
    assert body["quote"]["deadlineDays"] == get_settings().deadline_normal_days


def test_quote_urgent_and_notarized(client):
    settings = get_settings()
    response = client.post(
        "/quotes",
        files={"file": ("id.jpg", b"\xff\xd8\xff", "image/jpeg")},
        data={"urgent": "true", "notarized": "true"},
    )
    quote = response.json()["quote"]
    assert quote["subtotal"] == 10.0
    assert quote["urgencySurcharge"] == 10.0 * settings.urgency_rate
    assert quote["notaryFee"] == settings.notary_fee
    assert quote["deadlineDays"] == settings.deadline_urgent_days
