"""
geometry.py — Percentage regions → absolute pixels, and font scaling.

Layouts are authored once against a canonical 1920×1080 leaflet. Regions are
percentages of the target image; font sizes are canonical points multiplied by
a uniform scale factor for the actual output size.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

CANONICAL_W = 1920
CANONICAL_H = 1080


@dataclass(frozen=True)
class PixelBox:
    """Absolute pixel rectangle: top-left corner plus size."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def resolve_region(region, image_width: int, image_height: int) -> PixelBox:
    """
    Resolve a percentage region against a concrete image size.

    Each edge is rounded independently and the size is the difference of the
    rounded edges, so two regions sharing an edge in percent share it in pixels.
    """
    left   = round_half_up(region.x / 100 * image_width)
    top    = round_half_up(region.y / 100 * image_height)
    right  = round_half_up((region.x + region.width) / 100 * image_width)
    bottom = round_half_up((region.y + region.height) / 100 * image_height)
    return PixelBox(left, top, right - left, bottom - top)


def font_scale(image_width: int, image_height: int) -> float:
    """Uniform scale from canonical points to this image: min(W/1920, H/1080)."""
    return min(image_width / CANONICAL_W, image_height / CANONICAL_H)


def scale_font(points: float, scale: float) -> int:
    return max(1, round_half_up(points * scale))
