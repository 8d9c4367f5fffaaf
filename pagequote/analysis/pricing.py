"""Pricing rule engine: word count → density tier → page price.

Shared by both estimators.  All functions are pure; the fraction table and
tier thresholds live in pagequote.core.constants.

    price(density, base) = base × TIER_FRACTIONS[density]

No rounding happens here; rounding is a presentation concern.
"""
from __future__ import annotations

import math
from collections.abc import Iterable

from pagequote.analysis.types import AnalysisResult, DensityTier, FileKind, PageResult, Phase
from pagequote.core.constants import (
    ASSUMED_WORDS_PER_PAGE,
    TIER_FRACTIONS,
    WORDS_HIGH_MAX,
    WORDS_MEDIUM_MIN,
)


def tier_fraction(density: DensityTier) -> float:
    """Return the fixed price fraction for *density*."""
    return TIER_FRACTIONS[DensityTier(density).value]


def check_base_price(base_price_per_page: float) -> None:
    """Raise ValueError unless *base_price_per_page* is a finite number >= 0."""
    if not math.isfinite(base_price_per_page) or base_price_per_page < 0:
        raise ValueError(
            f"base_price_per_page must be a finite number >= 0; got {base_price_per_page!r}"
        )


def price(density: DensityTier, base_price_per_page: float) -> float:
    """Return the price of one page of *density* at *base_price_per_page*.

    Raises ValueError for a negative or non-finite base price.
    """
    check_base_price(base_price_per_page)
    return base_price_per_page * tier_fraction(density)


def classify_word_count(word_count: int) -> DensityTier:
    """Map a page word count to its density tier.

    0 → blank, 1–99 → low, 100–250 → medium, 251+ → high.
    Scanned pages never pass through here.
    """
    if word_count <= 0:
        return DensityTier.BLANK
    if word_count < WORDS_MEDIUM_MIN:
        return DensityTier.LOW
    if word_count <= WORDS_HIGH_MAX:
        return DensityTier.MEDIUM
    return DensityTier.HIGH


def make_page(
    page_number: int,
    density: DensityTier,
    word_count: int,
    base_price_per_page: float,
) -> PageResult:
    """Build a priced PageResult."""
    density = DensityTier(density)
    return PageResult(
        page_number=page_number,
        word_count=word_count,
        density=density,
        price=price(density, base_price_per_page),
        fraction=tier_fraction(density),
        included=True,
    )


def build_result(
    pages: Iterable[PageResult],
    *,
    is_image: bool,
    file_type: FileKind,
    phase: Phase,
) -> AnalysisResult:
    """Sum page prices into a fresh AnalysisResult.

    original_total_price starts equal to total_price.
    """
    pages = tuple(pages)
    total = sum(p.price for p in pages)
    return AnalysisResult(
        total_pages=len(pages),
        pages=pages,
        total_price=total,
        original_total_price=total,
        is_image=is_image,
        phase=phase,
        file_type=FileKind(file_type),
    )


def uniform_pages(
    count: int,
    density: DensityTier,
    word_count: int,
    base_price_per_page: float,
) -> list[PageResult]:
    """Return *count* identical pages numbered 1..count."""
    return [
        make_page(n, density, word_count, base_price_per_page)
        for n in range(1, count + 1)
    ]


def fallback_result(
    base_price_per_page: float,
    file_type: FileKind,
    phase: Phase,
    page_count: int = 1,
) -> AnalysisResult:
    """Return the "assume dense" result used when content cannot be parsed."""
    pages = uniform_pages(
        page_count, DensityTier.HIGH, ASSUMED_WORDS_PER_PAGE, base_price_per_page
    )
    return build_result(pages, is_image=False, file_type=file_type, phase=phase)


def estimate_image(buffer: bytes, base_price_per_page: float) -> AnalysisResult:
    """Return the single scanned page used for every image upload.

    The buffer is never inspected: an image is always one page.
    """
    page = make_page(1, DensityTier.SCANNED, ASSUMED_WORDS_PER_PAGE, base_price_per_page)
    return build_result([page], is_image=True, file_type=FileKind.IMAGE, phase="deep")
