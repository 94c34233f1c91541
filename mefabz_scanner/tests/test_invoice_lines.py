"""Tests for line normalization and vertical band filtering."""

from mefabz_scanner.domain.invoice import RecognizedLine
from mefabz_scanner.invoice.invoice_parser import filter_footer_band, filter_product_band, normalize_lines


def test_normalize_lines_collapses_whitespace_and_drops_blanks(line_at) -> None:
    lines = [
        line_at("  MEFABZ \t Shoe   Rack ", 30),
        RecognizedLine("   "),
        RecognizedLine(""),
        RecognizedLine("Black\n"),
    ]

    normalized = normalize_lines(lines)

    assert [line.text for line in normalized] == ["MEFABZ Shoe Rack", "Black"]
    assert normalized[0].bounding_box == lines[0].bounding_box


def test_product_band_bounds_are_inclusive(line_at) -> None:
    lines = [
        line_at("header", 11),
        line_at("top edge", 12),
        line_at("middle", 50),
        line_at("bottom edge", 88),
        line_at("footer", 89),
    ]

    kept = filter_product_band(lines, 1000)

    assert [line.text for line in kept] == ["top edge", "middle", "bottom edge"]


def test_line_without_box_is_always_in_product_band_never_in_footer(line_at) -> None:
    lines = [line_at("no box", None), line_at("3", 95)]

    assert [line.text for line in filter_product_band(lines, 1000)] == ["no box"]
    assert [line.text for line in filter_footer_band(lines, 1000)] == ["3"]


def test_footer_band_starts_at_eighty_percent(line_at) -> None:
    lines = [line_at("above", 79), line_at("edge", 80), line_at("bottom", 99)]

    assert [line.text for line in filter_footer_band(lines, 1000)] == ["edge", "bottom"]


def test_filters_tolerate_empty_input() -> None:
    assert filter_product_band([], 1000) == []
    assert filter_footer_band([], 1000) == []
    assert normalize_lines([]) == []
