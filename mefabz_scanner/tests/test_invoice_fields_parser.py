"""Tests for page number and brand extraction."""

import pytest
from mefabz_scanner.domain.invoice import RecognizedLine
from mefabz_scanner.invoice.invoice_parser import detect_brand, extract_page_number


def test_page_number_rejects_decorated_footer(line_at) -> None:
    assert extract_page_number([line_at("Page 3", 95)], 1000) is None


def test_page_number_accepts_bare_digits(line_at) -> None:
    assert extract_page_number([line_at("MEFABZ Rack", 30), line_at("3", 95)], 1000) == "3"


def test_page_number_prefers_lowest_footer_line(line_at) -> None:
    lines = [line_at("4", 97), line_at("7", 85)]

    assert extract_page_number(lines, 1000) == "4"


def test_page_number_footer_wins_over_later_unboxed_line(line_at) -> None:
    lines = [line_at("2", 90), line_at("9", None)]

    assert extract_page_number(lines, 1000) == "2"


def test_page_number_falls_back_to_last_numeric_line(line_at) -> None:
    lines = [line_at("12", 50), line_at("MEFABZ Rack", 60), line_at("Page 1 of 2", 95)]

    assert extract_page_number(lines, 1000) == "12"


def test_page_number_keeps_leading_zeros(line_at) -> None:
    assert extract_page_number([line_at("007", 95)], 1000) == "007"


@pytest.mark.parametrize("text", ["3.", "#3", "3/4", "- 3 -", "l2"])
def test_page_number_has_no_ocr_correction(line_at, text: str) -> None:
    assert extract_page_number([line_at(text, 95)], 1000) is None


@pytest.mark.parametrize(
    "text",
    ["MEFABZ Shoe Rack", "Sold by mefabz.in", "M.E.F.A.B.Z Home", "www-mefabz-com"],
)
def test_brand_detected_as_normalized_substring(text: str) -> None:
    assert detect_brand([RecognizedLine(text)], ("MEFABZ",))


def test_brand_not_detected_without_prefix() -> None:
    lines = [RecognizedLine("Generic Invoice"), RecognizedLine("5")]

    assert not detect_brand(lines, ("MEFABZ",))
    assert not detect_brand([], ("MEFABZ",))


def test_brand_detection_checks_every_prefix() -> None:
    lines = [RecognizedLine("ACME-HOME Tax Invoice")]

    assert detect_brand(lines, ("MEFABZ", "ACME HOME"))
