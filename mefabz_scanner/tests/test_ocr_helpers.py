"""Tests for OCR transformation helpers."""

import io

from mefabz_scanner.domain.invoice import BoundingBox, MatchConfig, ParsedInvoice, Success
from mefabz_scanner.invoice.invoice_result_parser import parse_invoice
from mefabz_scanner.invoice.ocr_helpers import resize_image_bytes, transform_ocr_result


def _bbox(x0: int, y0: int, x1: int, y1: int) -> list[list[int]]:
    return [[x0, y0], [x1, y0], [x1, y1], [x0, y1]]


def test_transform_removes_padding_and_low_confidence_detections() -> None:
    raw_result = {
        "status": "success",
        "image_width": 1100,
        "image_height": 1100,
        "detections": [
            [_bbox(100, 350, 600, 390), ["MEFABZ Shoe Rack", 0.98]],
            [_bbox(100, 200, 500, 240), ["Tax Invoice", 0.97]],
            [_bbox(700, 350, 800, 390), ["~~", 0.2]],
            [_bbox(500, 990, 530, 1020), ["3", 0.95]],
        ],
    }

    page = transform_ocr_result(raw_result, padding=50)

    assert page.image_height == 1000
    assert [line.text for line in page.lines] == ["Tax Invoice", "MEFABZ Shoe Rack", "3"]
    assert page.lines[1].bounding_box == BoundingBox(top=300, left=50, right=550, bottom=340)


def test_transform_handles_empty_detections() -> None:
    page = transform_ocr_result({"image_width": 100, "image_height": 100, "detections": []}, padding=0)

    assert page.lines == ()
    assert page.image_height == 100


def test_transformed_page_parses_end_to_end() -> None:
    raw_result = {
        "image_width": 800,
        "image_height": 1000,
        "detections": [
            [_bbox(20, 20, 400, 60), ["MEFABZ HOME PVT LTD", 0.99]],
            [_bbox(20, 300, 500, 330), ["MEFABZ Shoe Stand Cover", 0.99]],
            [_bbox(20, 335, 200, 360), ["(Grey)", 0.93]],
            [_bbox(20, 400, 700, 430), ["MEFABZ Hanger Set 2 12% $10.00", 0.97]],
            [_bbox(20, 800, 400, 830), ["Grand Total $20.00", 0.99]],
            [_bbox(390, 960, 410, 985), ["1", 0.91]],
        ],
    }

    page = transform_ocr_result(raw_result, padding=0)
    result = parse_invoice(page.lines, page.image_height, MatchConfig())

    assert result == Success(
        ParsedInvoice(products=("Mefabz Shoe Stand Cover (Grey)", "Mefabz Hanger Set"), page_number="1")
    )


def test_resize_image_bytes_pads_small_images() -> None:
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (100, 200), "white").save(buffer, format="PNG")

    resized = resize_image_bytes(buffer.getvalue(), padding=10)

    assert Image.open(io.BytesIO(resized)).size == (120, 220)


def test_resize_image_bytes_limits_largest_dimension() -> None:
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (400, 200), "white").save(buffer, format="PNG")

    resized = resize_image_bytes(buffer.getvalue(), max_dimension=100, padding=0)

    assert Image.open(io.BytesIO(resized)).size == (100, 50)
