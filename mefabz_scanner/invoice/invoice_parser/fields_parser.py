"""Page number and brand extraction from OCR invoice lines."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from mefabz_scanner.domain.invoice import RecognizedLine

from .common import _is_page_number_text
from .lines import _footer_center_y, filter_footer_band

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def extract_page_number(lines: Sequence[RecognizedLine], image_height: int) -> str | None:
    """
    Extract the page number from the footer.

    Footer lines are checked bottom-up first; if none is a bare number, all
    lines are checked in reverse order. Only digit-only lines qualify, so
    "Page 3" is never accepted.
    """
    footer_lines = sorted(
        filter_footer_band(lines, image_height),
        key=lambda line: _footer_center_y(line) or 0,
        reverse=True,
    )
    for line in footer_lines:
        if _is_page_number_text(line.text):
            return line.text.strip()

    for line in reversed(lines):
        if _is_page_number_text(line.text):
            return line.text.strip()

    return None


def _normalized_for_brand(text: str) -> str:
    return _NON_ALPHANUMERIC.sub("", text.lower())


def detect_brand(lines: Iterable[RecognizedLine], prefixes: Sequence[str]) -> bool:
    """Return True if any configured prefix appears anywhere in any line, ignoring punctuation."""
    normalized_prefixes = [_normalized_for_brand(prefix) for prefix in prefixes]
    normalized_prefixes = [prefix for prefix in normalized_prefixes if prefix]
    for line in lines:
        normalized_line = _normalized_for_brand(line.text)
        if any(prefix in normalized_line for prefix in normalized_prefixes):
            return True
    return False
