"""JPEG encoding used at the persistence boundary."""

from __future__ import annotations

from io import BytesIO

from PIL import Image, UnidentifiedImageError

DEFAULT_QUALITY = 0.8
_MATTE = (255, 255, 255)


def _pillow_quality(quality: float) -> int:
    """Map a 0..1 compression quality onto Pillow's 1..95 JPEG scale."""

    if not 0.0 <= quality <= 1.0:
        raise ValueError(f"JPEG quality must be between 0 and 1, got {quality}")
    return max(1, min(95, int(round(quality * 100))))


def encode_jpeg(image: Image.Image, quality: float = DEFAULT_QUALITY) -> bytes:
    """Flatten ``image`` onto white and encode it as JPEG."""

    if image.mode in ("RGBA", "LA", "P"):
        rgba = image.convert("RGBA")
        flattened = Image.new("RGB", rgba.size, _MATTE)
        flattened.paste(rgba, mask=rgba.getchannel("A"))
    else:
        flattened = image.convert("RGB")

    buffer = BytesIO()
    flattened.save(buffer, format="JPEG", quality=_pillow_quality(quality))
    return buffer.getvalue()


def to_jpeg_bytes(image_data: bytes, quality: float = DEFAULT_QUALITY) -> bytes:
    """Re-encode arbitrary image bytes as JPEG.

    Raises ``ValueError`` when the bytes are not a supported image.
    """

    try:
        with Image.open(BytesIO(image_data)) as img:
            img.load()
            return encode_jpeg(img, quality)
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError("Data is not a supported image.") from exc
