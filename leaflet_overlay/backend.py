"""
backend.py — Drawing primitives behind the placer and text renderer.

The placement and wrapping maths is backend-independent; only these three
primitives touch pixels. PillowBackend is the server-side implementation.
All primitives draw in place on a canvas the caller already owns.
"""

from __future__ import annotations

from typing import Tuple

from PIL import Image, ImageDraw, ImageFont


class RasterBackend:
    """Interface for the pixel-writing primitives the engine needs."""

    def composite(self, canvas: Image.Image, asset: Image.Image, xy: Tuple[int, int]) -> None:
        raise NotImplementedError

    def fill_rect(self, canvas: Image.Image, box: Tuple[float, float, float, float], color) -> None:
        raise NotImplementedError

    def draw_text(
        self,
        canvas: Image.Image,
        xy: Tuple[float, float],
        text: str,
        font: ImageFont.FreeTypeFont,
        fill,
        anchor: str,
    ) -> None:
        raise NotImplementedError


class PillowBackend(RasterBackend):
    """Pillow implementation. Canvases must be RGBA."""

    def composite(self, canvas: Image.Image, asset: Image.Image, xy: Tuple[int, int]) -> None:
        canvas.alpha_composite(asset.convert("RGBA"), dest=xy)

    def fill_rect(self, canvas: Image.Image, box: Tuple[float, float, float, float], color) -> None:
        x0, y0, x1, y1 = box
        if x1 <= x0 or y1 <= y0:
            return
        # ImageDraw treats the second corner as inclusive
        ImageDraw.Draw(canvas).rectangle([x0, y0, x1 - 1, y1 - 1], fill=color)

    def draw_text(self, canvas, xy, text, font, fill, anchor) -> None:
        ImageDraw.Draw(canvas).text(xy, text, fill=fill, font=font, anchor=anchor)
