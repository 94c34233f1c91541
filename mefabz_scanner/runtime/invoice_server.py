"""FastAPI server for parsing invoice photos uploaded from a phone."""

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mefabz_scanner.domain.invoice import ApiFailure, Error
from mefabz_scanner.invoice.formatter import result_to_dict
from mefabz_scanner.invoice.invoice_result_parser import parse_invoice, result_from_ocr_failure
from mefabz_scanner.runtime.invoice_pipeline import (
    InvoiceImageUnreadable,
    NoTextFound,
    OCRServiceUnavailable,
    call_ocr_service_async,
)
from mefabz_scanner.runtime.invoice_settings import load_invoice_settings
from mefabz_scanner.runtime.logging import get_logger

logger = get_logger(__name__)

app = FastAPI(title="MEFABZ Invoice Scanner")


@app.post("/scan")
async def scan_invoice(request: Request) -> JSONResponse:
    """Receive an invoice image, run OCR and return the parse result."""
    form = await request.form()

    file = None
    for key, value in form.items():
        logger.debug("Form field: key=%r, type=%s", key, type(value))
        if hasattr(value, "read"):
            file = value
            break

    if not file:
        return JSONResponse({"status": "error", "message": "No file found in request"}, status_code=400)

    filename = getattr(file, "filename", None) or "invoice.jpg"
    contents = await file.read()

    settings = load_invoice_settings()
    config = settings.match_config(
        prefixes=request.query_params.get("prefixes"),
        suffixes=request.query_params.get("suffixes"),
    )

    try:
        _, page = await call_ocr_service_async(contents, Path(filename).name, settings.ocr_url)
    except InvoiceImageUnreadable as e:
        logger.warning("Unreadable upload %s: %s", filename, e)
        return JSONResponse(result_to_dict(Error(ApiFailure(message=str(e)))), status_code=400)
    except (OCRServiceUnavailable, NoTextFound) as e:
        logger.warning("OCR failed for %s: %s", filename, e)
        return JSONResponse(result_to_dict(result_from_ocr_failure(str(e))))

    result = parse_invoice(page.lines, page.image_height, config)
    logger.info("Parsed %s: %s", filename, type(result).__name__)
    return JSONResponse(result_to_dict(result))


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
