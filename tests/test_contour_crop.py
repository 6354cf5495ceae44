"""Tests for content-bounds detection and the padded contour crop."""

from PIL import Image

from leaflet_overlay.config import EngineConfig
from leaflet_overlay.contour_crop import ContentBounds, contour_crop, find_content_bounds


def _transparent_with_block(size=(200, 200), box=(60, 70, 110, 110), color=(200, 0, 0, 255)):
    img = Image.new("RGBA", size, (0, 0, 0, 0))
    img.paste(color, box)
    return img


class TestFindContentBounds:
    def test_fully_transparent_has_no_content(self):
        assert find_content_bounds(Image.new("RGBA", (50, 50), (0, 0, 0, 0))) is None

    def test_pure_white_has_no_content(self):
        assert find_content_bounds(Image.new("RGB", (50, 50), (255, 255, 255))) is None

    def test_bounds_are_inclusive(self):
        bounds = find_content_bounds(_transparent_with_block())
        assert bounds == ContentBounds(top=70, left=60, bottom=109, right=109)

    def test_fixed_background_color(self):
        img = Image.new("RGB", (80, 80), (0, 120, 0))
        img.paste((200, 0, 0), (30, 30, 50, 40))
        bounds = find_content_bounds(img, background=(0, 120, 0))
        assert bounds == ContentBounds(top=30, left=30, bottom=39, right=49)


class TestContourCrop:
    def test_crop_adds_padding(self):
        cropped = contour_crop(_transparent_with_block())
        assert cropped.size == (50 + 2 * 5, 40 + 2 * 5)

    def test_crop_is_a_fixed_point(self):
        once = contour_crop(_transparent_with_block())
        twice = contour_crop(once)
        assert twice.size == once.size

    def test_padding_is_clamped_at_edges(self):
        img = _transparent_with_block(size=(100, 100), box=(0, 0, 40, 30))
        assert contour_crop(img).size == (45, 35)

    def test_no_content_returns_original_object(self):
        img = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
        assert contour_crop(img) is img

    def test_crop_below_minimum_returns_original_object(self):
        img = _transparent_with_block(box=(100, 100, 103, 103))
        assert contour_crop(img) is img

    def test_minimum_size_is_configurable(self):
        img = _transparent_with_block(box=(100, 100, 103, 103))
        cropped = contour_crop(img, config=EngineConfig(crop_min_size=5))
        assert cropped.size == (13, 13)

    def test_white_margin_is_trimmed(self, logo_on_white):
        cropped = contour_crop(logo_on_white)
        assert cropped.size == (110, 60)

    def test_crop_keeps_pixels(self):
        cropped = contour_crop(_transparent_with_block())
        assert cropped.getpixel((5, 5)) == (200, 0, 0, 255)
        assert cropped.getpixel((0, 0)) == (0, 0, 0, 0)
