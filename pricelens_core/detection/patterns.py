"""
Pattern Library - Declarative tables for price/review classification

Everything the detector treats as "looks like a price", "looks like a
review" or "is a placeholder image" lives here, so heuristics can be tuned
without touching the scanning or climbing code.
"""

import re
from typing import Optional

from ..dom.selectors import compile_selector
from ..dom.visual_node import VisualNode


# =============================================================================
# PRICE TOKENS
# =============================================================================

CURRENCY_SYMBOLS = "$€£¥₹₽₩"

CURRENCY_CODES = [
    "USD", "EUR", "GBP", "JPY", "AUD", "CAD", "CHF", "CNY", "SEK", "NZD",
    "KRW", "INR", "RUB", "ZAR", "SGD", "TRY", "BRL", "MXN", "IDR", "DKK",
    "PLN", "THB", "HUF", "CZK", "ILS", "MYR", "PHP", "RON", "ARS", "CLP",
    "COP", "EGP", "HKD", "IQD", "JOD", "KWD", "LBP", "MAD", "MUR", "NGN",
    "NOK", "OMR", "QAR", "SAR", "VND",
]

_CURRENCY = "(?:[{}]|(?:{}))".format(re.escape(CURRENCY_SYMBOLS), "|".join(CURRENCY_CODES))
# Whitespace including no-break and thin spaces; \s is ASCII-only below
_SPACE = "\\s\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
# 1-3 leading digits, optional thousands groups, optional 1-2 decimals
_AMOUNT = rf"[0-9]{{1,3}}(?:[.,{_SPACE}][0-9]{{3}})*(?:[.,][0-9]{{1,2}})?"

# Prefix form ("$12.99", "EUR 1.234,56") may appear anywhere in the text;
# suffix form ("19,99 €") must span the whole text. Word boundaries are
# ASCII, so a price followed by an accented letter still matches.
PRICE_PATTERN = re.compile(
    rf"{_CURRENCY}[{_SPACE}]*{_AMOUNT}\b|^{_AMOUNT}[{_SPACE}]*{_CURRENCY}$",
    re.IGNORECASE | re.ASCII,
)


# =============================================================================
# REVIEW / RATING TEXT
# =============================================================================

REVIEW_KEYWORDS = [
    r"star(?:s)?",
    r"rating",
    r"review(?:s)?",
    r"out of \d+",
    r"sur \d+",
    r"from \d+(?:\.\d+)?",
    r"customer reviews",
    r"overall score",
    r"average rating",
    r"wertung",
    r"beoordeling",
]

# "4.5/5" style ratio shorthand
REVIEW_RATIO = r"^\d(?:\.\d+)?/\d$"

REVIEW_PATTERN = re.compile(
    r"\b(?:{})\b|{}".format("|".join(REVIEW_KEYWORDS), REVIEW_RATIO),
    re.IGNORECASE | re.ASCII,
)

PURELY_NUMERIC = re.compile(r"^[0-9]+$")


# =============================================================================
# SELECTOR TABLES
# =============================================================================

PRICE_SCAN_SELECTORS = [
    'span', 'div', 'p', 'strong', 'b', 'ins', 'a',
    '[itemprop="price"]', '[data-price]', '[data-saleprice]',
]

REVIEW_CONTAINER_SELECTORS = [
    '[itemprop="review"]', '[class*="review-section"]', '[id*="reviews"]',
    '[class*="rating-summary"]', '[class*="customer-reviews"]',
    '[aria-label*="rating"]', '[data-testid*="review"]', '[data-qa*="review"]',
    '.reviews', '.product-reviews', '.rating-stars', '.star-rating', '.score',
]

TITLE_SELECTORS = [
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'a[href]', '[role="heading"]',
    '[itemprop="name"]', '.product-title', '.item-name',
]

IMAGE_SELECTOR = 'img'

is_price_scan_target = compile_selector(", ".join(PRICE_SCAN_SELECTORS))
is_review_container = compile_selector(", ".join(REVIEW_CONTAINER_SELECTORS))
is_title_target = compile_selector(", ".join(TITLE_SELECTORS))
is_image = compile_selector(IMAGE_SELECTOR)


# =============================================================================
# SEMANTIC ATTRIBUTES
# =============================================================================

PRICE_ATTRIBUTES = ["data-price", "data-saleprice"]
REVIEW_ATTRIBUTES = ["data-rating"]
PRICE_ITEMPROP_TOKENS = ["price"]
REVIEW_ITEMPROP_TOKENS = ["reviewrating", "ratingvalue"]


def _itemprop(node: VisualNode) -> str:
    return (node.get_attr("itemprop") or "").lower()


def has_price_attribute(node: VisualNode) -> bool:
    if any(node.has_attr(a) for a in PRICE_ATTRIBUTES):
        return True
    itemprop = _itemprop(node)
    return any(tok in itemprop for tok in PRICE_ITEMPROP_TOKENS)


def has_review_attribute(node: VisualNode) -> bool:
    if any(node.has_attr(a) for a in REVIEW_ATTRIBUTES):
        return True
    itemprop = _itemprop(node)
    return any(tok in itemprop for tok in REVIEW_ITEMPROP_TOKENS)


# =============================================================================
# IMAGE SOURCES
# =============================================================================

LAZY_SOURCE_ATTRIBUTES = ["data-src", "data-lazyload", "data-lazy-src", "data-original"]

PLACEHOLDER_IMAGE_MARKERS = [
    "data:image/gif;base64",
    "blank.gif",
    "spacer.gif",
    "transparent.gif",
    "pixel.gif",
]

NOT_AVAILABLE = "N/A"


def is_data_uri(url: Optional[str]) -> bool:
    return bool(url) and url.strip().lower().startswith("data:")


def is_placeholder_source(url: Optional[str]) -> bool:
    """Empty sources, data URIs and known blank/tracking images."""
    if not url or not url.strip():
        return True
    lowered = url.strip().lower()
    if is_data_uri(lowered):
        return True
    return any(marker in lowered for marker in PLACEHOLDER_IMAGE_MARKERS)


# =============================================================================
# TEXT PREDICATES
# =============================================================================

def looks_like_price(text: str) -> bool:
    return bool(PRICE_PATTERN.search(text or ""))


def looks_like_review(text: str) -> bool:
    return bool(REVIEW_PATTERN.search(text or ""))


def is_purely_numeric(text: str) -> bool:
    return bool(PURELY_NUMERIC.match(text or ""))
