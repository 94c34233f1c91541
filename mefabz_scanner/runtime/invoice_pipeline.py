"""Runtime helpers for the invoice OCR pipeline (non-HTTP)."""

import json
import time
from pathlib import Path
from typing import Any

import httpx
from PIL import UnidentifiedImageError

from mefabz_scanner.invoice.ocr_helpers import OcrPage, resize_image_bytes, transform_ocr_result
from mefabz_scanner.runtime.logging import get_logger
from mefabz_scanner.runtime.paths import get_paths

logger = get_logger(__name__)

OCR_TIMEOUT_SECONDS = 60.0
NO_TEXT_FOUND_MESSAGE = "No text found in invoice image"


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR service cannot be reached or returns an error."""


class InvoiceImageUnreadable(ValueError):
    """Raised when image bytes cannot be decoded before OCR."""


class NoTextFound(RuntimeError):
    """Raised when OCR succeeds but returns no usable lines."""


def prepare_image_bytes(image_bytes: bytes) -> bytes:
    """Resize and pad image bytes for OCR, surfacing decode failures distinctly."""
    try:
        return resize_image_bytes(image_bytes)
    except (UnidentifiedImageError, OSError) as e:
        raise InvoiceImageUnreadable(f"Unable to decode invoice image: {e}") from e


def _transform_or_raise(raw_result: Any) -> OcrPage:
    """Transform a raw OCR result, reporting a malformed payload as an OCR failure."""
    try:
        return transform_ocr_result(raw_result)
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        logger.error("Malformed OCR response: %s", e)
        raise OCRServiceUnavailable(f"Malformed OCR response: {e}") from e


def _page_from_response(response: httpx.Response) -> tuple[dict[str, Any], OcrPage]:
    if response.status_code != 200:
        logger.error("OCR service error: %s - %s", response.status_code, response.text)
        raise OCRServiceUnavailable(f"OCR service error: {response.status_code}")

    try:
        raw_result = response.json()
    except ValueError as e:
        logger.error("OCR service returned non-JSON body: %s", response.text[:200])
        raise OCRServiceUnavailable(f"Malformed OCR response: {e}") from e

    page = _transform_or_raise(raw_result)
    if not page.lines:
        raise NoTextFound(NO_TEXT_FOUND_MESSAGE)
    return raw_result, page


def call_ocr_service(image_path: Path, ocr_url: str) -> tuple[dict[str, Any], OcrPage]:
    """
    Call the OCR service and return both raw and transformed results.

    Returns:
        Tuple of (raw_result, page).

    Raises:
        InvoiceImageUnreadable: the file is not a decodable image
        OCRServiceUnavailable: the service is unreachable, answered non-200 or sent a malformed result
        NoTextFound: the service found no usable text
    """
    ocr_url = ocr_url.rstrip("/")
    logger.info("Sending invoice to OCR service at %s...", ocr_url)

    resized_bytes = prepare_image_bytes(image_path.read_bytes())

    try:
        start_time = time.time()
        response = httpx.post(
            f"{ocr_url}/ocr",
            files={"file": (image_path.name, resized_bytes, "image/jpeg")},
            timeout=OCR_TIMEOUT_SECONDS,
        )
        logger.info("OCR service returned in %.2f seconds", time.time() - start_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e

    return _page_from_response(response)


async def call_ocr_service_async(
    image_bytes: bytes,
    filename: str,
    ocr_url: str,
) -> tuple[dict[str, Any], OcrPage]:
    """Async variant of call_ocr_service for in-memory uploads."""
    ocr_url = ocr_url.rstrip("/")
    resized_bytes = prepare_image_bytes(image_bytes)

    try:
        start_time = time.time()
        async with httpx.AsyncClient(timeout=OCR_TIMEOUT_SECONDS) as client:
            response = await client.post(
                f"{ocr_url}/ocr",
                files={"file": (filename, resized_bytes, "image/jpeg")},
            )
        logger.info("OCR service returned in %.2f seconds", time.time() - start_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e

    return _page_from_response(response)


def save_ocr_json(ocr_result: dict[str, Any], image_path: Path) -> Path:
    """Save raw OCR result JSON for offline re-parsing."""
    paths = get_paths()
    paths.ensure_invoice_directories()
    ocr_json_path = paths.invoices_ocr_json / f"{image_path.stem}.json"
    ocr_json_path.write_text(json.dumps(ocr_result, indent=2))
    logger.debug("OCR JSON saved to: %s", ocr_json_path)
    return ocr_json_path


def load_ocr_page(json_path: Path) -> OcrPage:
    """
    Load a saved raw OCR result and transform it into an OcrPage.

    Raises:
        FileNotFoundError: json_path does not exist
        OCRServiceUnavailable: the file is not a valid OCR result
    """
    if not json_path.exists():
        raise FileNotFoundError(f"OCR JSON not found: {json_path}")
    try:
        raw_result = json.loads(json_path.read_text())
    except ValueError as e:
        raise OCRServiceUnavailable(f"Malformed OCR response: {e}") from e
    return _transform_or_raise(raw_result)
