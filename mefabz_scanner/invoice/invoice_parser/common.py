"""Shared constants and helpers for OCR invoice parsing."""

import re

# Vertical band (fraction of image height) that holds itemized product rows
PRODUCT_BAND_TOP = 0.12
PRODUCT_BAND_BOTTOM = 0.88
# Lines centered at or below this fraction of the height are footer lines
FOOTER_BAND_START = 0.80

# A page number is digits only, no decorations
PAGE_NUMBER_PATTERN = re.compile(r"^[0-9]+$")

WHITESPACE_RUN = re.compile(r"\s+")

# "1.", "2)", "3-" list markers in front of a product line
LEADING_LIST_MARKER = re.compile(r"^\d+[.)-]?\s*")

CURRENCY_SYMBOLS = ("$", "₹", "€")

# Everything from a tax/SKU column header to the end of the line
TRAILING_KEYWORD_COLUMN = re.compile(r"\b(?:qty|qnty|quantity|sku|hsn|tax|vat|gst)\b.*", re.IGNORECASE)

NUMERIC_COLUMN_PATTERNS = (
    re.compile(r"^[xX]?\d+(?:\.\d+)?%?$"),  # 2, 10.5, x3, 18%
    re.compile(r"^\d+[xX]$"),  # 2x
    re.compile(r"^[xX]$"),  # bare multiplier in "x 2"
)

DATE_PATTERN = re.compile(r"\b\d{1,2}[-/]\d{1,2}[-/]\d{2,4}\b")
PURE_PRICE_PATTERN = re.compile(r"^[$€₹£]?\s*\d+(?:[.,]\d{1,2})?\s*[$€₹£]?$")
PRICE_WITH_SYMBOL_PATTERN = re.compile(r"[$€₹]\s*\d")
DIGITS_ONLY_PATTERN = re.compile(r"^\d+$")

# Phrases that mark header/footer/summary lines during candidate extraction
BLOCKED_PHRASES = (
    "invoice",
    "inv no",
    "bill to",
    "ship to",
    "subtotal",
    "total",
    "tax",
    "vat",
    "gst",
    "amount",
    "balance",
    "date",
    "phone",
    "email",
    "address",
    "page",
    "terms",
    "payment",
    "thank you",
    "sku",
    "qty",
    "quantity",
)

# Second, narrower word list applied to assembled products
FORBIDDEN_PRODUCT_WORDS = (
    "subtotal",
    "total",
    "tax",
    "vat",
    "invoice",
    "date",
    "qty",
    "quantity",
    "sku",
    "amount",
)


def _collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return WHITESPACE_RUN.sub(" ", text).strip()


def _is_page_number_text(text: str) -> bool:
    return PAGE_NUMBER_PATTERN.match(text.strip()) is not None


def _is_numeric_column_token(token: str) -> bool:
    """Return True if token looks like a quantity, multiplier or percentage column."""
    normalized = token.replace(",", "")
    return any(pattern.match(normalized) for pattern in NUMERIC_COLUMN_PATTERNS)


def _contains_date(text: str) -> bool:
    return DATE_PATTERN.search(text) is not None


def _is_pure_price(text: str) -> bool:
    return PURE_PRICE_PATTERN.match(text) is not None


def _contains_price_with_symbol(text: str) -> bool:
    return PRICE_WITH_SYMBOL_PATTERN.search(text) is not None


def _looks_like_non_product_line(line: str) -> bool:
    """Return True if a cleaned candidate looks like header, footer or summary noise."""
    if len(line) < 3:
        return True
    if not any(c.isalpha() for c in line):
        return True

    lower = line.lower()
    if any(phrase in lower for phrase in BLOCKED_PHRASES):
        return True
    if DIGITS_ONLY_PATTERN.match(line):
        return True
    if _contains_date(line):
        return True
    if _is_pure_price(line):
        return True

    digit_count = sum(1 for c in line if c.isdigit())
    return digit_count >= len(line) // 2


def _looks_like_forbidden_product(line: str) -> bool:
    """Second-pass filter for assembled products (summary words, prices, dates)."""
    lower = line.lower()
    if any(word in lower for word in FORBIDDEN_PRODUCT_WORDS):
        return True
    return _contains_price_with_symbol(line) or _contains_date(line)
