"""Fixed constants of the page pricing model.

These are calibration values of the estimators, not per-deployment
settings.  Prices per page come from :mod:`pagequote.core.settings`;
everything here is shared by the fast and deep passes.

Density tiers
-------------
blank   : 0 words, no visual content       → 0×
low     : 1–99 words                        → 0.25×
medium  : 100–250 words                     → 0.5×
high    : 251+ words                        → 1×
scanned : no text but images/vector drawing → 1×
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# Word-count tier boundaries
# ---------------------------------------------------------------------------

WORDS_MEDIUM_MIN = 100   # first word count priced as "medium"
WORDS_HIGH_MAX = 250     # last word count priced as "medium"; 251+ is "high"

TIER_FRACTIONS: dict[str, float] = {
    "blank": 0.0,
    "low": 0.25,
    "medium": 0.5,
    "high": 1.0,
    "scanned": 1.0,
}

# ---------------------------------------------------------------------------
# Calibration
# ---------------------------------------------------------------------------

ASSUMED_WORDS_PER_PAGE = 300      # "unknown but assume dense"
DOCX_WORDS_PER_PAGE = 250         # typical word density of a printed page

# ---------------------------------------------------------------------------
# Fast PDF scan
# ---------------------------------------------------------------------------

FAST_TAIL_BYTES = 32 * 1024
MIN_PAGES = 1
MAX_PAGES = 5000

# ---------------------------------------------------------------------------
# Deep PDF scan
# ---------------------------------------------------------------------------

# More operations than this on a text-less page means visual content.
GRAPHICS_OP_THRESHOLD = 50

GRAPHICS_OPS: frozenset[str] = frozenset({
    "paintImage",
    "paintInlineImage",
    "constructPath",
    "fill",
    "stroke",
})

# ---------------------------------------------------------------------------
# File extensions
# ---------------------------------------------------------------------------

IMAGE_EXTENSIONS: frozenset[str] = frozenset({
    "jpg", "jpeg", "png", "gif", "webp", "tiff", "tif",
})
DOCX_EXTENSIONS: frozenset[str] = frozenset({"docx"})
