"""Runtime infrastructure for the invoice scanner.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Settings loading via load_invoice_settings()

Usage:
    from mefabz_scanner.runtime import get_logger, get_paths, load_invoice_settings

    logger = get_logger(__name__)
    config = load_invoice_settings().match_config()
"""

from mefabz_scanner.runtime.invoice_settings import InvoiceSettings, load_invoice_settings
from mefabz_scanner.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from mefabz_scanner.runtime.paths import ProjectPaths, get_paths, reset_paths

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Settings
    "InvoiceSettings",
    "load_invoice_settings",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
