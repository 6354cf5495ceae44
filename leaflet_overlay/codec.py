"""
codec.py — Raster decode / encode at the engine boundary.

Input arrives as raw bytes, base64, or a data URL; output leaves as PNG
(lossless) or JPEG (with a declared quality). Both failures are fatal and
surface as RasterDecodeError / EncodeError.
"""

from __future__ import annotations

import base64
import binascii
import io
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from .errors import EncodeError, RasterDecodeError
from .models import OutputFormat

JPEG_MATTE = (255, 255, 255)


def _to_bytes(data: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    text = data.strip()
    if text.startswith("data:") and "," in text:
        text = text.split(",", 1)[1]
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise RasterDecodeError(f"Invalid base64 image data: {exc}") from exc


def decode_raster(data: Union[bytes, bytearray, memoryview, str]) -> Image.Image:
    """Decode PNG/JPEG/WebP bytes (or base64 / data URL text) into an RGBA raster."""
    raw = _to_bytes(data)
    if not raw:
        raise RasterDecodeError("Empty image data")
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            return img.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise RasterDecodeError(f"Could not decode image ({len(raw)} bytes): {exc}") from exc


def encode_raster(
    image: Image.Image,
    output_format: Union[OutputFormat, str] = OutputFormat.PNG,
    quality: Optional[int] = None,
) -> bytes:
    """
    Encode a raster.

    PNG keeps alpha. JPEG flattens onto white and uses `quality` (default 90).
    """
    try:
        fmt = OutputFormat(output_format)
    except ValueError as exc:
        raise EncodeError(f"Unsupported output format: {output_format!r}") from exc

    buf = io.BytesIO()
    try:
        if fmt is OutputFormat.JPEG:
            rgba = image.convert("RGBA")
            flat = Image.new("RGB", rgba.size, JPEG_MATTE)
            flat.paste(rgba, mask=rgba.split()[3])
            flat.save(buf, format="JPEG", quality=90 if quality is None else quality)
        else:
            image.save(buf, format="PNG")
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Could not encode {fmt.value}: {exc}") from exc
    return buf.getvalue()


def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
