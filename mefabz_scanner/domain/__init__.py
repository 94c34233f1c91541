"""Core domain models for invoice scanning.

This module provides the data models shared by the parser, runtime and CLI:
- RecognizedLine, BoundingBox: OCR input lines
- MatchConfig: prefix/suffix configuration for one parse call
- ParsedInvoice, ParseResult, InvoiceError variants: parser output

Usage:
    from mefabz_scanner.domain import MatchConfig, RecognizedLine, Success
"""

from mefabz_scanner.domain.invoice import (
    DEFAULT_PREFIXES,
    DEFAULT_SUFFIX_TOKENS,
    ApiFailure,
    BlurryInvoice,
    BoundingBox,
    Error,
    InvoiceError,
    MatchConfig,
    NoProducts,
    NonMefabz,
    ParsedInvoice,
    ParseResult,
    RecognizedLine,
    Success,
    parse_prefixes,
    parse_suffix_tokens,
)

__all__ = [
    "DEFAULT_PREFIXES",
    "DEFAULT_SUFFIX_TOKENS",
    "ApiFailure",
    "BlurryInvoice",
    "BoundingBox",
    "Error",
    "InvoiceError",
    "MatchConfig",
    "NoProducts",
    "NonMefabz",
    "ParsedInvoice",
    "ParseResult",
    "RecognizedLine",
    "Success",
    "parse_prefixes",
    "parse_suffix_tokens",
]
