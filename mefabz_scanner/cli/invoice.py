"""Invoice command handlers used by the unified CLI."""

import argparse
import json
from collections.abc import Iterable
from pathlib import Path

from mefabz_scanner.application.invoices.scan import (
    InvoiceScanRequest,
    InvoiceScanResult,
    OcrJsonParseRequest,
    run_invoice_scan,
    run_ocr_json_parse,
)
from mefabz_scanner.domain.invoice import MatchConfig, Success
from mefabz_scanner.invoice.formatter import format_parse_result, result_to_dict
from mefabz_scanner.runtime import get_logger, load_invoice_settings

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_REJECTED = 2


def _match_config(args: argparse.Namespace) -> MatchConfig:
    return load_invoice_settings().match_config(prefixes=args.prefixes, suffixes=args.suffixes)


def _report(outcomes: Iterable[tuple[str, InvoiceScanResult]], as_json: bool) -> int:
    """Print each outcome and return the combined exit code."""
    exit_code = EXIT_OK
    json_rows: list[dict[str, object]] = []

    for source, outcome in outcomes:
        if outcome.status == "file_not_found" or outcome.result is None:
            logger.error("%s", outcome.error)
            if as_json:
                json_rows.append({"source": source, "status": "error", "kind": "file_not_found"})
            else:
                print(f"Error: {outcome.error}")
            exit_code = EXIT_USAGE
            continue

        if not isinstance(outcome.result, Success) and exit_code == EXIT_OK:
            exit_code = EXIT_REJECTED

        if as_json:
            json_rows.append({"source": source, **result_to_dict(outcome.result)})
        else:
            print(format_parse_result(outcome.result, source=source))
            if outcome.ocr_json_path is not None:
                print(f"OCR JSON: {outcome.ocr_json_path}")

    if as_json:
        print(json.dumps(json_rows, indent=2))
    return exit_code


def cmd_scan(args: argparse.Namespace) -> int:
    """OCR and parse each invoice image independently."""
    config = _match_config(args)
    ocr_url = args.ocr_url or load_invoice_settings().ocr_url

    outcomes = (
        (
            image,
            run_invoice_scan(
                InvoiceScanRequest(
                    image_path=Path(image),
                    ocr_url=ocr_url,
                    config=config,
                    save_ocr=args.save_ocr,
                )
            ),
        )
        for image in args.images
    )
    return _report(outcomes, args.json)


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse saved OCR JSON files without contacting the OCR service."""
    config = _match_config(args)
    outcomes = (
        (path, run_ocr_json_parse(OcrJsonParseRequest(json_path=Path(path), config=config)))
        for path in args.ocr_json
    )
    return _report(outcomes, args.json)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for receiving invoice uploads."""
    import uvicorn

    from mefabz_scanner.runtime import invoice_server as server

    print(f"Starting invoice server on {args.host}:{args.port}")
    print(f"Upload endpoint: http://{args.host}:{args.port}/scan")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
