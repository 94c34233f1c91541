"""Tests for the invoice upload server."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient
from mefabz_scanner.domain.invoice import BoundingBox, RecognizedLine
from mefabz_scanner.invoice.ocr_helpers import OcrPage
from mefabz_scanner.runtime import invoice_server
from mefabz_scanner.runtime.invoice_pipeline import InvoiceImageUnreadable, OCRServiceUnavailable


def _page(*texts_at: tuple[str, int]) -> OcrPage:
    return OcrPage(
        image_height=1000,
        lines=tuple(
            RecognizedLine(text, BoundingBox(top=center - 10, left=40, right=600, bottom=center + 10))
            for text, center in texts_at
        ),
    )


@pytest.fixture
def client() -> TestClient:
    return TestClient(invoice_server.app)


def _stub_ocr(monkeypatch: pytest.MonkeyPatch, outcome: OcrPage | Exception) -> list[str]:
    seen_urls: list[str] = []

    async def fake_ocr(image_bytes: bytes, filename: str, ocr_url: str) -> tuple[dict[str, Any], OcrPage]:
        seen_urls.append(ocr_url)
        if isinstance(outcome, Exception):
            raise outcome
        return {}, outcome

    monkeypatch.setattr(invoice_server, "call_ocr_service_async", fake_ocr)
    return seen_urls


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_scan_returns_parsed_invoice(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OCR_SERVICE_URL", "http://ocr.test")
    seen_urls = _stub_ocr(monkeypatch, _page(("MEFABZ Shoe Rack", 300), ("Black", 320), ("6", 960)))

    response = client.post("/scan", files={"file": ("page6.jpg", b"jpeg", "image/jpeg")})

    assert response.status_code == 200
    assert response.json() == {"status": "success", "products": ["Mefabz Shoe Rack Black"], "page_number": "6"}
    assert seen_urls == ["http://ocr.test"]


def test_scan_prefix_override_from_query(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_ocr(monkeypatch, _page(("ACME Lamp", 300), ("6", 960)))

    rejected = client.post("/scan", files={"file": ("p.jpg", b"jpeg", "image/jpeg")})
    accepted = client.post("/scan?prefixes=acme", files={"file": ("p.jpg", b"jpeg", "image/jpeg")})

    assert rejected.json()["kind"] == "non_mefabz"
    assert accepted.json()["products"] == ["Acme Lamp"]


def test_scan_without_file_is_bad_request(client: TestClient) -> None:
    response = client.post("/scan", data={"note": "no file"})

    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_scan_unreadable_image_is_bad_request(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_ocr(monkeypatch, InvoiceImageUnreadable("Unable to decode invoice image"))

    response = client.post("/scan", files={"file": ("p.jpg", b"junk", "image/jpeg")})

    assert response.status_code == 400
    assert response.json()["kind"] == "api_failure"


def test_scan_ocr_outage_is_api_failure(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_ocr(monkeypatch, OCRServiceUnavailable("OCR service error: 502"))

    response = client.post("/scan", files={"file": ("p.jpg", b"jpeg", "image/jpeg")})

    assert response.status_code == 200
    assert response.json()["detail"] == "OCR service error: 502"
