"""Parse recognized OCR lines into a validated ParseResult."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mefabz_scanner.domain.invoice import (
    ApiFailure,
    BlurryInvoice,
    Error,
    MatchConfig,
    NoProducts,
    NonMefabz,
    ParsedInvoice,
    ParseResult,
    RecognizedLine,
    Success,
)

from .invoice_parser import (
    AffixMatcher,
    detect_brand,
    extract_page_number,
    extract_product_candidates,
    filter_product_band,
    normalize_lines,
)
from .invoice_parser.common import _collapse_whitespace, _is_page_number_text, _looks_like_forbidden_product

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to parse invoice"


def _capitalize_token(token: str) -> str:
    """Lower-case a token and upper-case its first letter, so "(RED)" becomes "(Red)"."""
    lowered = token.lower()
    for index, char in enumerate(lowered):
        if char.isalpha():
            return lowered[:index] + char.upper() + lowered[index + 1 :]
    return lowered


def _title_case_product(raw: str) -> str:
    """Upper-case short tokens (acronyms, sizes) and capitalize the rest."""
    tokens = _collapse_whitespace(raw).split(" ")
    return " ".join(token.upper() if len(token) <= 2 else _capitalize_token(token) for token in tokens)


def _finalize_products(candidates: Sequence[str]) -> list[str]:
    products: list[str] = []
    for candidate in candidates:
        product = _title_case_product(candidate)
        if not product or _looks_like_forbidden_product(product):
            logger.debug("Dropped product %r in final validation", product)
            continue
        if product not in products:
            products.append(product)
    return products


def _sanitize_page_number(raw: str | None) -> str | None:
    if raw is None:
        return None
    trimmed = raw.strip()
    return trimmed if _is_page_number_text(trimmed) else None


def parse_invoice(
    lines: Sequence[RecognizedLine],
    image_height: int,
    config: MatchConfig | None = None,
) -> ParseResult:
    """
    Parse OCR lines from one invoice page.

    This never raises for well-formed input; every outcome is a Success or
    an Error carrying one of the InvoiceError variants.

    Args:
        lines: Recognized lines in OCR order, with optional pixel bounding boxes
        image_height: Height of the source image in pixels
        config: Brand prefixes and color/variant suffix tokens (defaults if None)

    Returns:
        Success with products and page number, or Error with the first failed check
    """
    config = config or MatchConfig()
    normalized = normalize_lines(lines)
    if not normalized:
        return Error(BlurryInvoice())

    if not detect_brand(normalized, config.prefixes):
        return Error(NonMefabz())

    matcher = AffixMatcher(config)
    product_lines = filter_product_band(normalized, image_height)
    candidates = extract_product_candidates(product_lines, matcher, image_height)
    products = _finalize_products(candidates)
    if not products:
        return Error(NoProducts())

    page_number = _sanitize_page_number(extract_page_number(normalized, image_height))
    if page_number is None:
        return Error(BlurryInvoice())

    logger.debug("Parsed %d products on page %s", len(products), page_number)
    return Success(ParsedInvoice(products=tuple(products), page_number=page_number))


def result_from_ocr_failure(message: str | None) -> Error:
    """
    Classify a failed OCR step.

    Blur and empty-text failures mean the user should retake the photo;
    anything else is reported as an API failure with the original message.
    """
    message = message or ""
    lower = message.lower()
    if "blur" in lower or "no text found" in lower:
        return Error(BlurryInvoice())
    return Error(ApiFailure(message=message if message.strip() else DEFAULT_FAILURE_MESSAGE))
