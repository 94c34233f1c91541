"""Runtime loader for invoice prefix/suffix settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from mefabz_scanner.domain.invoice import DEFAULT_PREFIXES, DEFAULT_SUFFIX_TOKENS, MatchConfig
from mefabz_scanner.runtime.logging import get_logger
from mefabz_scanner.runtime.paths import get_paths

logger = get_logger(__name__)

DEFAULT_PREFIXES_SETTING = ", ".join(DEFAULT_PREFIXES)
DEFAULT_SUFFIXES_SETTING = ", ".join(DEFAULT_SUFFIX_TOKENS)
DEFAULT_OCR_URL = "http://localhost:8001"


@dataclass(frozen=True)
class InvoiceSettings:
    """Raw comma-separated settings, as stored in invoice_settings.toml."""

    prefixes: str = DEFAULT_PREFIXES_SETTING
    suffixes: str = DEFAULT_SUFFIXES_SETTING
    ocr_url: str = DEFAULT_OCR_URL

    def match_config(self, prefixes: str | None = None, suffixes: str | None = None) -> MatchConfig:
        """Build a MatchConfig, optionally overriding either setting."""
        return MatchConfig.from_strings(
            self.prefixes if prefixes is None else prefixes,
            self.suffixes if suffixes is None else suffixes,
        )


def _setting(config: dict[str, object], key: str, default: str) -> str:
    value = config.get(key, default)
    if isinstance(value, list):
        # Also accept TOML arrays: prefixes = ["MEFABZ", "ACME"]
        return ", ".join(str(item) for item in value)
    return str(value)


@lru_cache(maxsize=4)
def load_invoice_settings(config_path: str | None = None) -> InvoiceSettings:
    """
    Load invoice settings from invoice_settings.toml.

    Args:
        config_path: Optional TOML path override. If None, uses default project path.

    Returns:
        InvoiceSettings; missing file or keys fall back to the defaults.
    """
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    env_ocr_url = os.environ.get("OCR_SERVICE_URL")
    path = Path(config_path) if config_path is not None else get_paths().invoice_settings
    if not path.exists():
        logger.debug("Settings file not found: %s; using defaults", path)
        return InvoiceSettings(ocr_url=env_ocr_url or DEFAULT_OCR_URL)

    with open(path, "rb") as f:
        config = tomllib.load(f)

    return InvoiceSettings(
        prefixes=_setting(config, "prefixes", DEFAULT_PREFIXES_SETTING),
        suffixes=_setting(config, "suffixes", DEFAULT_SUFFIXES_SETTING),
        ocr_url=env_ocr_url or _setting(config, "ocr_url", DEFAULT_OCR_URL),
    )
