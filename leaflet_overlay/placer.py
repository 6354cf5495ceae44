"""
placer.py — Fit a logo into a region and composite it onto the canvas.

Size comes from the region (percent of canvas), position from the anchor:

  top-left    → (padding, padding)
  top-right   → (canvas_w - w - padding, padding)
  top-center  → horizontally centred, top edge at the region's y

The final position is always clamped so the asset stays fully on-canvas.
There is no collision avoidance between assets; choose regions that do not
overlap.
"""

from __future__ import annotations

from typing import Optional, Tuple

from PIL import Image

from .backend import PillowBackend, RasterBackend
from .geometry import round_half_up
from .models import Anchor, Placement, Region


def fit_within(
    width: int,
    height: int,
    max_width: float,
    max_height: float,
) -> Tuple[int, int]:
    """
    Shrink (never enlarge) to fit inside max_width × max_height, aspect preserved.

    Width is constrained first, then height is re-checked against the
    already-scaled size.
    """
    w, h = float(width), float(height)
    if w > max_width:
        scale = max_width / w
        w = max_width
        h = h * scale
    if h > max_height:
        scale = max_height / h
        h = max_height
        w = w * scale
    return max(1, round_half_up(w)), max(1, round_half_up(h))


def anchor_position(
    anchor: Anchor,
    canvas_size: Tuple[int, int],
    asset_size: Tuple[int, int],
    padding: int,
    top: int = 0,
) -> Tuple[int, int]:
    """Top-left draw position for an asset, clamped into the canvas."""
    cw, ch = canvas_size
    w, h = asset_size
    anchor = Anchor(anchor)

    if anchor is Anchor.TOP_RIGHT:
        x, y = cw - w - padding, padding
    elif anchor is Anchor.TOP_CENTER:
        x, y = round_half_up((cw - w) / 2), top
    else:
        x, y = padding, padding

    x = max(0, min(x, cw - w))
    y = max(0, min(y, ch - h))
    return x, y


def place_asset(
    canvas: Image.Image,
    asset: Image.Image,
    region: Region,
    anchor: Anchor = Anchor.TOP_LEFT,
    padding: int = 20,
    asset_id: str = "asset",
    backend: Optional[RasterBackend] = None,
) -> Tuple[Image.Image, Placement]:
    """
    Scale `asset` into `region` and alpha-composite it onto a copy of `canvas`.

    Args:
        canvas:   Base raster. Not modified.
        asset:    Logo raster, ideally already background-removed / cropped.
        region:   width/height bound the asset size (percent of canvas);
                  y is the top edge for the top-center anchor.
        anchor:   Corner the asset is pinned to.
        padding:  Distance from the canvas edge in px.
        asset_id: Label recorded on the returned Placement.

    Returns:
        (new RGBA canvas, Placement describing the drawn box)
    """
    backend = backend or PillowBackend()
    cw, ch = canvas.size

    max_w = min(region.width / 100 * cw, cw)
    max_h = min(region.height / 100 * ch, ch)
    w, h = fit_within(asset.width, asset.height, max_w, max_h)
    w, h = min(w, cw), min(h, ch)

    logo = asset.convert("RGBA")
    if (w, h) != logo.size:
        logo = logo.resize((w, h), Image.LANCZOS)

    top = round_half_up(region.y / 100 * ch)
    x, y = anchor_position(anchor, (cw, ch), (w, h), padding, top=top)

    out = canvas.convert("RGBA")
    backend.composite(out, logo, (x, y))
    return out, Placement(id=asset_id, x=x, y=y, width=w, height=h)
