#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], int | None], args: argparse.Namespace) -> int:
    """Run a command handler, keeping process termination in this entrypoint."""
    try:
        return _coerce_exit_code(command(args))
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)


def _add_match_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--prefixes", default=None, help="Comma-separated brand prefixes (overrides settings file)")
    parser.add_argument("--suffixes", default=None, help="Comma-separated color/variant words (overrides settings file)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="MEFABZ invoice scanner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  scan <image>...            OCR and parse invoice photos
  parse <ocr.json>...        Re-parse saved OCR JSON files
  serve [--host] [--port]    Start invoice upload server

Exit codes:
  0 = every invoice parsed, 1 = missing file or usage error, 2 = invoice rejected
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Log parser decisions at DEBUG level")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="OCR and parse invoice photos")
    scan_parser.add_argument("images", nargs="+", help="Path(s) to invoice images")
    scan_parser.add_argument("--ocr-url", default=None, help="OCR service URL (default: from settings)")
    scan_parser.add_argument("--save-ocr", action="store_true", help="Keep raw OCR JSON in invoices/ocr_json/")
    _add_match_arguments(scan_parser)

    parse_parser = subparsers.add_parser("parse", help="Re-parse saved OCR JSON files")
    parse_parser.add_argument("ocr_json", nargs="+", help="Path(s) to raw OCR JSON files")
    _add_match_arguments(parse_parser)

    serve_parser = subparsers.add_parser("serve", help="Start invoice upload server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.verbose:
        from mefabz_scanner.runtime import configure_logging, set_log_level

        configure_logging()
        set_log_level(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "scan":
        from mefabz_scanner.cli.invoice import cmd_scan

        return _run_command(cmd_scan, args)
    elif args.command == "parse":
        from mefabz_scanner.cli.invoice import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "serve":
        from mefabz_scanner.cli.invoice import cmd_serve

        return _run_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
