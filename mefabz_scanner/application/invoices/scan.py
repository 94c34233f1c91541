"""Invoice scan workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from mefabz_scanner.domain.invoice import MatchConfig, ParseResult
from mefabz_scanner.invoice.invoice_result_parser import parse_invoice, result_from_ocr_failure
from mefabz_scanner.runtime.invoice_pipeline import (
    NO_TEXT_FOUND_MESSAGE,
    InvoiceImageUnreadable,
    NoTextFound,
    OCRServiceUnavailable,
    call_ocr_service,
    load_ocr_page,
    save_ocr_json,
)
from mefabz_scanner.runtime.logging import get_logger

logger = get_logger(__name__)

ScanStatus = Literal[
    "file_not_found",
    "parsed",
]


@dataclass(frozen=True)
class InvoiceScanRequest:
    """Inputs for scanning one invoice image."""

    image_path: Path
    ocr_url: str
    config: MatchConfig
    save_ocr: bool = False


@dataclass(frozen=True)
class OcrJsonParseRequest:
    """Inputs for re-parsing a saved OCR JSON file."""

    json_path: Path
    config: MatchConfig


@dataclass(frozen=True)
class InvoiceScanResult:
    """Outcome from the scan workflow."""

    status: ScanStatus
    result: ParseResult | None = None
    ocr_json_path: Path | None = None
    error: str | None = None


def run_invoice_scan(request: InvoiceScanRequest) -> InvoiceScanResult:
    """Run scan flow: OCR -> optional OCR JSON save -> parse."""
    if not request.image_path.exists():
        return InvoiceScanResult(
            status="file_not_found",
            error=f"Invoice file not found: {request.image_path}",
        )

    try:
        raw_ocr_result, page = call_ocr_service(request.image_path, request.ocr_url)
    except (OCRServiceUnavailable, InvoiceImageUnreadable, NoTextFound) as exc:
        logger.warning("OCR failed for %s: %s", request.image_path.name, exc)
        return InvoiceScanResult(status="parsed", result=result_from_ocr_failure(str(exc)))

    ocr_json_path = save_ocr_json(raw_ocr_result, request.image_path) if request.save_ocr else None

    return InvoiceScanResult(
        status="parsed",
        result=parse_invoice(page.lines, page.image_height, request.config),
        ocr_json_path=ocr_json_path,
    )


def run_ocr_json_parse(request: OcrJsonParseRequest) -> InvoiceScanResult:
    """Parse a previously saved OCR JSON without calling the OCR service."""
    if not request.json_path.exists():
        return InvoiceScanResult(
            status="file_not_found",
            error=f"OCR JSON not found: {request.json_path}",
        )

    try:
        page = load_ocr_page(request.json_path)
    except OCRServiceUnavailable as exc:
        logger.warning("Unusable OCR JSON %s: %s", request.json_path.name, exc)
        return InvoiceScanResult(status="parsed", result=result_from_ocr_failure(str(exc)))

    if not page.lines:
        return InvoiceScanResult(status="parsed", result=result_from_ocr_failure(NO_TEXT_FOUND_MESSAGE))

    return InvoiceScanResult(
        status="parsed",
        result=parse_invoice(page.lines, page.image_height, request.config),
        ocr_json_path=request.json_path,
    )
