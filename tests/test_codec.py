"""Tests for raster decode/encode at the engine boundary."""

import base64
import io

import pytest
from PIL import Image

from leaflet_overlay.codec import decode_raster, encode_raster, to_base64
from leaflet_overlay.errors import EncodeError, RasterDecodeError
from leaflet_overlay.models import OutputFormat


def _png_bytes(size=(8, 6), color=(1, 2, 3, 255)):
    buf = io.BytesIO()
    Image.new("RGBA", size, color).save(buf, format="PNG")
    return buf.getvalue()


class TestDecodeRaster:
    def test_png_bytes(self):
        img = decode_raster(_png_bytes())
        assert img.mode == "RGBA"
        assert img.size == (8, 6)

    def test_base64_and_data_url(self):
        b64 = base64.b64encode(_png_bytes()).decode("ascii")
        assert decode_raster(b64).size == (8, 6)
        assert decode_raster(f"data:image/png;base64,{b64}").size == (8, 6)

    def test_bytearray_and_memoryview(self):
        data = _png_bytes()
        assert decode_raster(bytearray(data)).size == (8, 6)
        assert decode_raster(memoryview(data)).size == (8, 6)

    def test_garbage_bytearray_raises_decode_error(self):
        with pytest.raises(RasterDecodeError):
            decode_raster(bytearray(b"not an image"))
        with pytest.raises(RasterDecodeError):
            decode_raster(memoryview(b""))

    def test_jpeg_is_converted_to_rgba(self):
        buf = io.BytesIO()
        Image.new("RGB", (10, 10), (255, 0, 0)).save(buf, format="JPEG")
        assert decode_raster(buf.getvalue()).mode == "RGBA"

    def test_garbage_bytes(self):
        with pytest.raises(RasterDecodeError):
            decode_raster(b"definitely not an image")

    def test_empty_bytes(self):
        with pytest.raises(RasterDecodeError):
            decode_raster(b"")

    def test_invalid_base64(self):
        with pytest.raises(RasterDecodeError):
            decode_raster("!!! not base64 !!!")


class TestEncodeRaster:
    def test_png_keeps_alpha(self):
        img = Image.new("RGBA", (4, 4), (10, 20, 30, 0))
        data = encode_raster(img, OutputFormat.PNG)
        assert data.startswith(b"\x89PNG")
        assert decode_raster(data).getpixel((0, 0)) == (10, 20, 30, 0)

    def test_jpeg_flattens_onto_white(self):
        img = Image.new("RGBA", (16, 16), (0, 0, 0, 0))
        data = encode_raster(img, "jpeg", quality=95)
        assert data.startswith(b"\xff\xd8")
        r, g, b, a = decode_raster(data).getpixel((8, 8))
        assert min(r, g, b) >= 250
        assert a == 255

    def test_jpeg_quality_affects_size(self):
        img = Image.effect_noise((64, 64), 80).convert("RGBA")
        assert len(encode_raster(img, "jpeg", quality=20)) < len(encode_raster(img, "jpeg", quality=95))

    def test_unknown_format(self):
        with pytest.raises(EncodeError):
            encode_raster(Image.new("RGBA", (2, 2)), "gif")


def test_to_base64():
    assert base64.b64decode(to_base64(b"\x00\x01abc")) == b"\x00\x01abc"
