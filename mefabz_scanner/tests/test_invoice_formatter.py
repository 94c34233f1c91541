"""Tests for parse result formatting."""

import pytest
from mefabz_scanner.domain.invoice import (
    ApiFailure,
    BlurryInvoice,
    Error,
    InvoiceError,
    NoProducts,
    NonMefabz,
    ParsedInvoice,
    Success,
)
from mefabz_scanner.invoice.formatter import error_message, format_parse_result, result_to_dict


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (NonMefabz(), "This is not a genuine invoice (Prefix missing)"),
        (NoProducts(), "No valid products found on this invoice"),
        (BlurryInvoice(), "Invoice seems blurry. Please capture again"),
        (ApiFailure(message="timeout"), "Invoice parsing failed: timeout"),
    ],
)
def test_error_message_per_variant(error: InvoiceError, expected: str) -> None:
    assert error_message(error) == expected


def test_result_to_dict_success() -> None:
    result = Success(ParsedInvoice(products=("Mefabz Rack",), page_number="2"))

    assert result_to_dict(result) == {"status": "success", "products": ["Mefabz Rack"], "page_number": "2"}


def test_result_to_dict_api_failure_keeps_detail() -> None:
    payload = result_to_dict(Error(ApiFailure(message="OCR service error: 502")))

    assert payload["status"] == "error"
    assert payload["kind"] == "api_failure"
    assert payload["detail"] == "OCR service error: 502"


def test_format_parse_result_lists_products() -> None:
    result = Success(ParsedInvoice(products=("Mefabz Rack", "Mefabz Hook"), page_number="7"))

    text = format_parse_result(result, source="page7.jpg")

    assert "Invoice: page7.jpg" in text
    assert "Page: 7" in text
    assert "  1. Mefabz Rack" in text
    assert "  2. Mefabz Hook" in text


def test_format_parse_result_error() -> None:
    text = format_parse_result(Error(NoProducts()))

    assert "Rejected: No valid products found on this invoice" in text
