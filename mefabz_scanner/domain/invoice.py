"""Data models for invoice scanning."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

DEFAULT_PREFIXES: tuple[str, ...] = ("MEFABZ",)

DEFAULT_SUFFIX_TOKENS: tuple[str, ...] = (
    "black",
    "white",
    "green",
    "grey",
    "gray",
    "brown",
    "red",
    "cream",
    "blue",
    "yellow",
    "pink",
    "purple",
    "orange",
)


@dataclass(frozen=True)
class BoundingBox:
    """Pixel-space rectangle of a recognized line."""

    top: int
    left: int
    right: int
    bottom: int

    @property
    def center_y(self) -> int:
        return (self.top + self.bottom) // 2


@dataclass(frozen=True)
class RecognizedLine:
    """A single physical text line returned by OCR."""

    text: str
    bounding_box: BoundingBox | None = None


def _normalize_tokens(raw: str, *, upper: bool) -> tuple[str, ...]:
    tokens: list[str] = []
    for part in raw.split(","):
        token = part.strip()
        token = token.upper() if upper else token.lower()
        if token and token not in tokens:
            tokens.append(token)
    return tuple(tokens)


def parse_prefixes(raw: str) -> tuple[str, ...]:
    """Parse a comma-separated prefix setting; blank input falls back to the defaults."""
    return _normalize_tokens(raw, upper=True) or DEFAULT_PREFIXES


def parse_suffix_tokens(raw: str) -> tuple[str, ...]:
    """Parse a comma-separated suffix setting; blank input yields no tokens."""
    return _normalize_tokens(raw, upper=False)


@dataclass(frozen=True)
class MatchConfig:
    """Prefix and suffix configuration for one parse call."""

    prefixes: tuple[str, ...] = DEFAULT_PREFIXES
    suffix_tokens: tuple[str, ...] = DEFAULT_SUFFIX_TOKENS

    def __post_init__(self) -> None:
        # Normalize even when constructed directly with un-normalized values.
        object.__setattr__(self, "prefixes", parse_prefixes(",".join(self.prefixes)))
        object.__setattr__(self, "suffix_tokens", parse_suffix_tokens(",".join(self.suffix_tokens)))

    @classmethod
    def from_strings(cls, prefixes: str, suffixes: str) -> MatchConfig:
        return cls(prefixes=parse_prefixes(prefixes), suffix_tokens=parse_suffix_tokens(suffixes))


_PAGE_NUMBER = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ParsedInvoice:
    """Validated invoice content: at least one product and a numeric page number."""

    products: tuple[str, ...]
    page_number: str

    def __post_init__(self) -> None:
        if not self.products:
            raise ValueError("ParsedInvoice requires at least one product")
        if any(not product.strip() for product in self.products):
            raise ValueError(f"ParsedInvoice products must be non-blank: {self.products!r}")
        if _PAGE_NUMBER.fullmatch(self.page_number) is None:
            raise ValueError(f"ParsedInvoice page number must be digits only: {self.page_number!r}")


@dataclass(frozen=True)
class NonMefabz:
    """No configured prefix appears anywhere on the page."""

    kind: str = field(default="non_mefabz", init=False)


@dataclass(frozen=True)
class NoProducts:
    """Brand found, but no product candidate survived cleaning."""

    kind: str = field(default="no_products", init=False)


@dataclass(frozen=True)
class BlurryInvoice:
    """No strictly numeric page number, or OCR returned no usable text."""

    kind: str = field(default="blurry_invoice", init=False)


@dataclass(frozen=True)
class ApiFailure:
    """The OCR step itself failed."""

    message: str
    kind: str = field(default="api_failure", init=False)


InvoiceError = NonMefabz | NoProducts | BlurryInvoice | ApiFailure


@dataclass(frozen=True)
class Success:
    invoice: ParsedInvoice


@dataclass(frozen=True)
class Error:
    reason: InvoiceError


ParseResult = Success | Error
