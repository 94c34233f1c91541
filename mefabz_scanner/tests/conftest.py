"""Shared pytest fixtures for mefabz_scanner tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from mefabz_scanner.domain.invoice import BoundingBox, RecognizedLine
from mefabz_scanner.runtime.invoice_settings import load_invoice_settings
from mefabz_scanner.runtime.paths import reset_paths

IMAGE_HEIGHT = 1000

LineFactory = Callable[..., RecognizedLine]


@pytest.fixture(autouse=True)
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point runtime paths at an empty temporary project root."""
    monkeypatch.setenv("MEFABZ_SCANNER_HOME", str(tmp_path))
    monkeypatch.delenv("OCR_SERVICE_URL", raising=False)
    reset_paths()
    load_invoice_settings.cache_clear()
    yield tmp_path
    reset_paths()
    load_invoice_settings.cache_clear()


@pytest.fixture
def line_at() -> LineFactory:
    """Build a line whose box is centered at center_pct of a 1000px image (None = no box)."""

    def _line_at(text: str, center_pct: float | None, image_height: int = IMAGE_HEIGHT) -> RecognizedLine:
        if center_pct is None:
            return RecognizedLine(text)
        center = int(image_height * center_pct / 100)
        return RecognizedLine(text, BoundingBox(top=center - 10, left=40, right=600, bottom=center + 10))

    return _line_at
