"""Product description extraction from prefix-led invoice lines."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from mefabz_scanner.domain.invoice import RecognizedLine

from .affix_matcher import AffixMatcher
from .common import (
    CURRENCY_SYMBOLS,
    LEADING_LIST_MARKER,
    TRAILING_KEYWORD_COLUMN,
    _collapse_whitespace,
    _is_numeric_column_token,
    _looks_like_non_product_line,
)

logger = logging.getLogger(__name__)


def _strip_leading_list_marker(text: str) -> str:
    """Remove "1.", "2)" or "3-" numbering at the start of a line."""
    return LEADING_LIST_MARKER.sub("", text, count=1)


def _truncate_after_suffix(text: str, matcher: AffixMatcher) -> str:
    """Cut everything after the first color/variant term."""
    match = matcher.find_suffix(text)
    if match is None:
        return text
    return text[: match.end()].strip()


def _truncate_at_currency(text: str) -> str:
    """Cut from the first currency symbol onwards, unless the line starts with it."""
    indexes = [index for index in (text.find(symbol) for symbol in CURRENCY_SYMBOLS) if index >= 0]
    if not indexes:
        return text
    first = min(indexes)
    if first == 0:
        return text
    return text[:first].strip()


def _strip_keyword_columns(text: str) -> str:
    """Drop trailing qty/sku/tax columns, from the first keyword to the end."""
    return TRAILING_KEYWORD_COLUMN.sub("", text).strip()


def _strip_trailing_numeric_columns(text: str) -> str:
    """
    Drop trailing quantity/percentage columns.

    Only a run of two or more numeric tokens is dropped; a single trailing
    number may be part of the name (e.g. "4 Layer ... 3") and is kept.
    """
    tokens = [token for token in text.split(" ") if token]
    if not tokens:
        return ""

    numeric_tail = 0
    for token in reversed(tokens):
        if not _is_numeric_column_token(token):
            break
        numeric_tail += 1

    if numeric_tail >= 2:
        tokens = tokens[: len(tokens) - numeric_tail]
    return " ".join(tokens)


def clean_product_candidate(raw: str, matcher: AffixMatcher) -> str:
    """
    Clean an OCR product line down to its description.

    Steps, in order: strip list numbering, collapse whitespace, truncate after
    the color/variant term, truncate at a price, drop tax/SKU columns, drop
    trailing numeric columns, collapse whitespace again.
    """
    cleaned = _strip_leading_list_marker(raw)
    cleaned = _collapse_whitespace(cleaned)
    cleaned = _truncate_after_suffix(cleaned, matcher)
    cleaned = _truncate_at_currency(cleaned)
    cleaned = _strip_keyword_columns(cleaned)
    cleaned = _strip_trailing_numeric_columns(cleaned)
    return _collapse_whitespace(cleaned)


def _dedupe(values: Iterable[str]) -> list[str]:
    """Remove exact duplicates, keeping the first occurrence."""
    return list(dict.fromkeys(values))


def extract_product_candidates(
    lines: Sequence[RecognizedLine],
    matcher: AffixMatcher,
    image_height: int,
) -> list[str]:
    """
    Extract cleaned product descriptions from product-band lines.

    A product starts on a line beginning with a configured prefix. When that
    line carries no color/variant term but the next line does, the next line
    is treated as its continuation and merged in.

    Args:
        lines: Product-band lines in OCR order
        matcher: Prefix/suffix matcher for this parse
        image_height: Image height in pixels (kept for signature parity with other extractors)

    Returns:
        Cleaned, de-duplicated product descriptions in page order
    """
    products: list[str] = []
    i = 0
    while i < len(lines):
        line_text = lines[i].text
        if not matcher.has_prefix(line_text):
            i += 1
            continue

        raw_text = line_text
        if not matcher.has_suffix(raw_text) and i + 1 < len(lines):
            next_text = lines[i + 1].text.strip()
            if matcher.has_suffix(next_text):
                raw_text = f"{raw_text} {next_text}"
                i += 1

        cleaned = clean_product_candidate(raw_text, matcher)
        if cleaned and not _looks_like_non_product_line(cleaned):
            products.append(cleaned)
        else:
            logger.debug("Rejected product candidate %r (cleaned to %r)", raw_text, cleaned)
        i += 1

    return _dedupe(products)
