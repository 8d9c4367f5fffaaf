"""Result dataclasses shared by the fast and deep estimators.

Every estimator returns an AnalysisResult, never loose dicts.  Callers
(quote UI, proposal generator, HTTP layer) only see this shape and must
not know which pass or which file handler produced it.

Field contract
--------------
PageResult
    page_number : 1-based position in the source document
    word_count  : words counted (or assumed) for the page
    density     : DensityTier driving the price fraction
    price       : base_price_per_page × fraction; never rounded here
    fraction    : tier fraction applied to the base price
    included    : always True; reserved for page exclusion

AnalysisResult
    total_pages          : len(pages)
    pages                : tuple of PageResult in document order
    total_price          : sum of page prices
    original_total_price : total_price at creation; carried unchanged
                           through manual overrides
    is_image             : True for single-image uploads
    phase                : "fast" | "deep" provenance tag
    file_type            : FileKind of the analysed upload
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

Phase = Literal["fast", "deep"]
_VALID_PHASES: frozenset[str] = frozenset({"fast", "deep"})


class DensityTier(str, Enum):
    BLANK = "blank"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    SCANNED = "scanned"


class FileKind(str, Enum):
    PDF = "pdf"
    IMAGE = "image"
    DOCX = "docx"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PageResult:
    """Density and price of a single page."""

    page_number: int
    word_count: int
    density: DensityTier
    price: float
    fraction: float
    included: bool = True

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1; got {self.page_number!r}")
        if self.word_count < 0:
            raise ValueError(f"word_count must be >= 0; got {self.word_count!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "pageNumber": self.page_number,
            "wordCount": self.word_count,
            "density": self.density.value,
            "price": self.price,
            "fraction": self.fraction,
            "included": self.included,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable page-by-page breakdown of one estimation call.

    Build instances through pricing.build_result(), which derives the
    totals from the pages.  Construction validates the page numbering
    and the price sum so a malformed result can never reach a caller.
    """

    total_pages: int
    pages: tuple[PageResult, ...]
    total_price: float
    original_total_price: float
    is_image: bool
    phase: Phase
    file_type: FileKind

    def __post_init__(self) -> None:
        if not self.pages:
            raise ValueError("an AnalysisResult needs at least one page")
        if self.total_pages != len(self.pages):
            raise ValueError(
                f"total_pages={self.total_pages} does not match "
                f"{len(self.pages)} page(s)"
            )
        numbers = [p.page_number for p in self.pages]
        if numbers != list(range(1, len(self.pages) + 1)):
            raise ValueError(f"page numbers must run 1..{len(self.pages)}; got {numbers!r}")
        if self.total_price != sum(p.price for p in self.pages):
            raise ValueError("total_price must equal the sum of page prices")
        if self.phase not in _VALID_PHASES:
            raise ValueError(
                f"phase must be one of {sorted(_VALID_PHASES)!r}; got {self.phase!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase wire shape consumed by the quote UI."""
        return {
            "totalPages": self.total_pages,
            "pages": [p.to_dict() for p in self.pages],
            "totalPrice": self.total_price,
            "originalTotalPrice": self.original_total_price,
            "isImage": self.is_image,
            "phase": self.phase,
            "fileType": self.file_type.value,
        }
