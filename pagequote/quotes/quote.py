"""Quote builder and manual page overrides.

A quote starts from the analysed page prices and adds the back-office
surcharges::

    subtotal          = result.total_price
    urgency_surcharge = subtotal × URGENCY_RATE   (urgent orders only)
    notary_fee        = NOTARY_FEE                (notarized orders only)
    total             = subtotal + urgency_surcharge + notary_fee

Staff may re-tier a page the estimator got wrong.  Overrides return a new
AnalysisResult; original_total_price keeps the estimator's figure so the
discount against the automatic price stays visible.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from pagequote.analysis.pricing import make_page
from pagequote.analysis.types import AnalysisResult, DensityTier
from pagequote.core.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quote:
    """Customer-facing price of one analysed document."""

    subtotal: float
    urgency_surcharge: float
    notary_fee: float
    total: float
    deadline_days: int
    urgent: bool
    notarized: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "subtotal": self.subtotal,
            "urgencySurcharge": self.urgency_surcharge,
            "notaryFee": self.notary_fee,
            "total": self.total,
            "deadlineDays": self.deadline_days,
            "urgent": self.urgent,
            "notarized": self.notarized,
        }


def build_quote(
    result: AnalysisResult,
    *,
    urgent: bool = False,
    notarized: bool = False,
    settings: Settings | None = None,
) -> Quote:
    """Price *result* with the configured urgency and notarization rules."""
    settings = settings or get_settings()
    subtotal = result.total_price
    surcharge = subtotal * settings.urgency_rate if urgent else 0.0
    notary = settings.notary_fee if notarized else 0.0
    deadline = settings.deadline_urgent_days if urgent else settings.deadline_normal_days
    return Quote(
        subtotal=subtotal,
        urgency_surcharge=surcharge,
        notary_fee=notary,
        total=subtotal + surcharge + notary,
        deadline_days=deadline,
        urgent=urgent,
        notarized=notarized,
    )


def override_page_density(
    result: AnalysisResult,
    page_number: int,
    density: DensityTier,
    base_price_per_page: float,
) -> AnalysisResult:
    """Return a copy of *result* with one page re-tiered.

    The page keeps its word count; its price and fraction follow the new
    tier.  total_price is recomputed and original_total_price is carried
    over unchanged.  Raises ValueError for a page outside 1..total_pages.
    """
    if not 1 <= page_number <= result.total_pages:
        raise ValueError(
            f"page_number must be in 1..{result.total_pages}; got {page_number!r}"
        )
    old = result.pages[page_number - 1]
    new = make_page(page_number, density, old.word_count, base_price_per_page)
    pages = result.pages[: page_number - 1] + (new,) + result.pages[page_number:]
    logger.info(
        "Page %d re-tiered %s -> %s", page_number, old.density.value, new.density.value
    )
    return replace(result, pages=pages, total_price=sum(p.price for p in pages))
