"""Invoice workflows."""

from mefabz_scanner.application.invoices.scan import (
    InvoiceScanRequest,
    InvoiceScanResult,
    OcrJsonParseRequest,
    run_invoice_scan,
    run_ocr_json_parse,
)

__all__ = [
    "InvoiceScanRequest",
    "InvoiceScanResult",
    "OcrJsonParseRequest",
    "run_invoice_scan",
    "run_ocr_json_parse",
]
