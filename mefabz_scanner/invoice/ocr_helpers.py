"""Pure OCR transformation helpers for invoice parsing."""

import io
from dataclasses import dataclass
from typing import Any

from mefabz_scanner.domain.invoice import BoundingBox, RecognizedLine

MAX_IMAGE_DIMENSION = 3000  # Resize if either dimension exceeds this
OCR_IMAGE_PADDING = 50  # White padding around image to prevent edge truncation
MIN_DETECTION_CONFIDENCE = 0.5


@dataclass(frozen=True)
class OcrPage:
    """Recognized lines of one image plus the unpadded image height."""

    image_height: int
    lines: tuple[RecognizedLine, ...]


def resize_image_bytes(
    image_bytes: bytes, max_dimension: int = MAX_IMAGE_DIMENSION, padding: int = OCR_IMAGE_PADDING
) -> bytes:
    """
    Resize image bytes if it exceeds max_dimension on either side.

    Also adds white padding around the image to prevent OCR edge truncation.

    Args:
        image_bytes: Image data as bytes
        max_dimension: Maximum allowed dimension (width or height)
        padding: White padding to add around image (pixels)

    Returns:
        Image bytes (JPEG format), resized if necessary, with padding added

    Raises:
        PIL.UnidentifiedImageError: If the bytes are not a decodable image
    """
    from PIL import Image, ImageOps

    img = Image.open(io.BytesIO(image_bytes))

    # Apply EXIF orientation so the footer is at the bottom for band filtering
    img = ImageOps.exif_transpose(img)

    width, height = img.size

    if width <= max_dimension and height <= max_dimension:
        img_final = img
    else:
        if width > height:
            new_width = max_dimension
            new_height = int(height * (max_dimension / width))
        else:
            new_height = max_dimension
            new_width = int(width * (max_dimension / height))

        img_final = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

    if padding > 0:
        img_final = ImageOps.expand(img_final, border=padding, fill="white")

    buffer = io.BytesIO()
    img_final.convert("RGB").save(buffer, format="JPEG", quality=95)
    return buffer.getvalue()


def _detection_box(points: list[list[float]], padding: int) -> BoundingBox:
    """Axis-aligned pixel box of a 4-point detection, with padding offset removed."""
    xs = [point[0] - padding for point in points]
    ys = [point[1] - padding for point in points]
    return BoundingBox(
        top=int(round(min(ys))),
        left=int(round(min(xs))),
        right=int(round(max(xs))),
        bottom=int(round(max(ys))),
    )


def transform_ocr_result(
    raw_result: dict[str, Any],
    padding: int = OCR_IMAGE_PADDING,
    min_confidence: float = MIN_DETECTION_CONFIDENCE,
) -> OcrPage:
    """
    Transform a raw OCR service result into recognized invoice lines.

    Each detection becomes one line. Coordinates are shifted back by the
    padding added during preprocessing, and lines are ordered top to bottom,
    then left to right.
    """
    image_height = int(raw_result.get("image_height", 0)) - 2 * padding
    detections = raw_result.get("detections", [])

    lines: list[RecognizedLine] = []
    for detection in detections:
        bbox, (text, confidence) = detection
        if confidence < min_confidence:
            continue
        if not str(text).strip():
            continue
        lines.append(RecognizedLine(text=str(text), bounding_box=_detection_box(bbox, padding)))

    lines.sort(key=lambda line: (line.bounding_box.top, line.bounding_box.left) if line.bounding_box else (0, 0))
    return OcrPage(image_height=max(image_height, 0), lines=tuple(lines))
