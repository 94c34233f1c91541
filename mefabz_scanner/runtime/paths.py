"""Centralized path management for the invoice scanner.

All runtime files live under one project root: the MEFABZ_SCANNER_HOME
environment variable when set, otherwise the current working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory."""
    home = os.environ.get("MEFABZ_SCANNER_HOME")
    if home:
        return Path(home).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths."""

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def invoice_settings(self) -> Path:
        """Prefix/suffix/OCR settings TOML file."""
        return self.config / "invoice_settings.toml"

    # --- Invoice paths ---
    @property
    def invoices(self) -> Path:
        """Root invoices directory."""
        return self.root / "invoices"

    @property
    def invoices_ocr_json(self) -> Path:
        """Raw OCR results (JSON) kept for offline re-parsing."""
        return self.invoices / "ocr_json"

    def ensure_invoice_directories(self) -> None:
        """Create all invoice-related directories if they don't exist."""
        self.invoices_ocr_json.mkdir(parents=True, exist_ok=True)


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance.

    Returns:
        The global ProjectPaths instance.
    """
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached ProjectPaths so the next call re-reads the environment."""
    global _paths
    _paths = None
