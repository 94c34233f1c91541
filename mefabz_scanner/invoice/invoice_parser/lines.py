"""Line normalization and bbox-based vertical band filtering."""

from __future__ import annotations

from collections.abc import Iterable

from mefabz_scanner.domain.invoice import RecognizedLine

from .common import FOOTER_BAND_START, PRODUCT_BAND_BOTTOM, PRODUCT_BAND_TOP, _collapse_whitespace


def normalize_lines(lines: Iterable[RecognizedLine]) -> list[RecognizedLine]:
    """Collapse whitespace in every line and drop lines that end up blank."""
    normalized: list[RecognizedLine] = []
    for line in lines:
        text = _collapse_whitespace(line.text)
        if not text:
            continue
        normalized.append(line if text == line.text else RecognizedLine(text, line.bounding_box))
    return normalized


def _product_center_y(line: RecognizedLine, image_height: int) -> int:
    """Vertical center for product-band checks; lines without a box sit mid-page."""
    if line.bounding_box is None:
        return image_height // 2
    return line.bounding_box.center_y


def _footer_center_y(line: RecognizedLine) -> int | None:
    """Vertical center for footer-band checks; lines without a box are never footer lines."""
    if line.bounding_box is None:
        return None
    return line.bounding_box.center_y


def filter_product_band(lines: Iterable[RecognizedLine], image_height: int) -> list[RecognizedLine]:
    """Keep lines whose center lies in the product band, preserving order."""
    top_limit = int(image_height * PRODUCT_BAND_TOP)
    bottom_limit = int(image_height * PRODUCT_BAND_BOTTOM)
    return [line for line in lines if top_limit <= _product_center_y(line, image_height) <= bottom_limit]


def filter_footer_band(lines: Iterable[RecognizedLine], image_height: int) -> list[RecognizedLine]:
    """Keep lines centered in the footer band, preserving order."""
    footer_start = int(image_height * FOOTER_BAND_START)
    footer: list[RecognizedLine] = []
    for line in lines:
        center_y = _footer_center_y(line)
        if center_y is not None and center_y >= footer_start:
            footer.append(line)
    return footer
