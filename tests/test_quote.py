"""Tests for pagequote/quotes/quote.py."""
from __future__ import annotations

import pytest

from pagequote.analysis.pricing import build_result, make_page
from pagequote.analysis.types import DensityTier, FileKind
from pagequote.core.settings import Settings
from pagequote.quotes.quote import build_quote, override_page_density


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        URGENCY_RATE=0.5,
        NOTARY_FEE=25.0,
        DEADLINE_NORMAL_DAYS=10,
        DEADLINE_URGENT_DAYS=2,
    )


@pytest.fixture()
def result():
    pages = [
        make_page(1, DensityTier.HIGH, 300, 10.0),
        make_page(2, DensityTier.MEDIUM, 150, 10.0),
        make_page(3, DensityTier.BLANK, 0, 10.0),
    ]
    return build_result(pages, is_image=False, file_type=FileKind.PDF, phase="deep")


# ---------------------------------------------------------------------------
# build_quote
# ---------------------------------------------------------------------------

def test_standard_quote(result, settings):
    quote = build_quote(result, settings=settings)
    assert quote.subtotal == 15.0
    assert quote.urgency_surcharge == 0.0
    assert quote.notary_fee == 0.0
    assert quote.total == 15.0
    assert quote.deadline_days == 10


def test_urgent_notarized_quote(result, settings):
    quote = build_quote(result, urgent=True, notarized=True, settings=settings)
    assert quote.urgency_surcharge == 7.5
    assert quote.notary_fee == 25.0
    assert quote.total == 47.5
    assert quote.deadline_days == 2


def test_quote_to_dict(result, settings):
    body = build_quote(result, notarized=True, settings=settings).to_dict()
    assert body == {
        "subtotal": 15.0,
        "urgencySurcharge": 0.0,
        "notaryFee": 25.0,
        "total": 40.0,
        "deadlineDays": 10,
        "urgent": False,
        "notarized": True,
    }


# ---------------------------------------------------------------------------
# override_page_density
# ---------------------------------------------------------------------------

def test_override_reprices_page_and_keeps_baseline(result):
    updated = override_page_density(result, 3, DensityTier.LOW, 10.0)
    assert updated.pages[2].density is DensityTier.LOW
    assert updated.pages[2].price == 2.5
    assert updated.pages[2].word_count == 0
    assert updated.total_price == 17.5
    assert updated.original_total_price == 15.0


def test_override_returns_new_object(result):
    updated = override_page_density(result, 1, DensityTier.BLANK, 10.0)
    assert updated is not result
    assert result.pages[0].density is DensityTier.HIGH
    assert result.total_price == 15.0


def test_chained_overrides_keep_first_baseline(result):
    once = override_page_density(result, 1, DensityTier.LOW, 10.0)
    twice = override_page_density(once, 2, DensityTier.BLANK, 10.0)
    assert twice.total_price == 2.5
    assert twice.original_total_price == 15.0


@pytest.mark.parametrize("page_number", [0, 4, -1])
def test_override_rejects_unknown_page(result, page_number):
    with pytest.raises(ValueError):
        override_page_density(result, page_number, DensityTier.LOW, 10.0)
