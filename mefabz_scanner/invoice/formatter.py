"""Format ParseResult values for terminal output and JSON responses."""

from typing import Any

from mefabz_scanner.domain.invoice import (
    ApiFailure,
    BlurryInvoice,
    Error,
    InvoiceError,
    NoProducts,
    NonMefabz,
    ParseResult,
    Success,
)


def error_message(error: InvoiceError) -> str:
    """User-facing message for each InvoiceError variant."""
    if isinstance(error, NonMefabz):
        return "This is not a genuine invoice (Prefix missing)"
    if isinstance(error, NoProducts):
        return "No valid products found on this invoice"
    if isinstance(error, BlurryInvoice):
        return "Invoice seems blurry. Please capture again"
    if isinstance(error, ApiFailure):
        return f"Invoice parsing failed: {error.message}"
    raise TypeError(f"Unknown invoice error: {error!r}")


def result_to_dict(result: ParseResult) -> dict[str, Any]:
    """JSON-ready representation of a parse result."""
    if isinstance(result, Success):
        return {
            "status": "success",
            "products": list(result.invoice.products),
            "page_number": result.invoice.page_number,
        }
    payload: dict[str, Any] = {
        "status": "error",
        "kind": result.reason.kind,
        "message": error_message(result.reason),
    }
    if isinstance(result.reason, ApiFailure):
        payload["detail"] = result.reason.message
    return payload


def format_parse_result(result: ParseResult, source: str = "") -> str:
    """
    Format a parse result as a human-readable block.

    Args:
        result: Outcome of parsing one invoice page
        source: Optional image/JSON filename shown in the header

    Returns:
        Multi-line text ending without a trailing newline
    """
    lines = ["=" * 60]
    if source:
        lines.append(f"Invoice: {source}")

    if isinstance(result, Error):
        lines.append(f"Rejected: {error_message(result.reason)}")
        lines.append("=" * 60)
        return "\n".join(lines)

    invoice = result.invoice
    lines.append(f"Page: {invoice.page_number}")
    lines.append(f"Products ({len(invoice.products)}):")
    for i, product in enumerate(invoice.products, 1):
        lines.append(f"  {i}. {product}")
    lines.append("=" * 60)
    return "\n".join(lines)
