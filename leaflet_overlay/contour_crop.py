"""
contour_crop.py — Trim excess transparent / white margin around a logo.

Cropping is lossless (no resampling) and a fixed point: re-cropping a
cropped image with the same thresholds keeps its size, because the padded
bounds of the content already span the whole image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image

from .background import ColorLike, _manhattan, parse_color
from .config import EngineConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentBounds:
    """Inclusive pixel indices of the tightest box around foreground pixels."""
    top: int
    left: int
    bottom: int
    right: int


def _foreground_mask(
    arr: np.ndarray,
    alpha_threshold: int,
    whiteness_threshold: int,
    background: Optional[ColorLike],
    tolerance: int,
) -> np.ndarray:
    transparent = arr[..., 3] < alpha_threshold
    white = (arr[..., :3] >= whiteness_threshold).all(axis=-1)
    bg = transparent | white
    if background is not None:
        bg |= _manhattan(arr, parse_color(background)) < tolerance * 3
    return ~bg


def find_content_bounds(
    image: Image.Image,
    alpha_threshold: int = 10,
    whiteness_threshold: int = 245,
    background: Optional[ColorLike] = None,
    tolerance: int = 40,
) -> Optional[ContentBounds]:
    """
    Locate non-background pixels.

    A pixel is background when it is effectively transparent, when every RGB
    channel is at or above `whiteness_threshold`, or (if `background` is given)
    when it lies within 3 × `tolerance` Manhattan distance of that colour.

    Returns None when the image has no foreground pixel at all.
    """
    arr = np.asarray(image.convert("RGBA"))
    mask = _foreground_mask(arr, alpha_threshold, whiteness_threshold, background, tolerance)

    rows = np.any(mask, axis=1)
    cols = np.any(mask, axis=0)
    if not rows.any():
        return None
    top    = int(np.argmax(rows))
    bottom = int(len(rows) - 1 - np.argmax(rows[::-1]))
    left   = int(np.argmax(cols))
    right  = int(len(cols) - 1 - np.argmax(cols[::-1]))
    return ContentBounds(top=top, left=left, bottom=bottom, right=right)


def contour_crop(
    image: Image.Image,
    config: Optional[EngineConfig] = None,
    background: Optional[ColorLike] = None,
    padding: Optional[int] = None,
    min_size: Optional[int] = None,
) -> Image.Image:
    """
    Crop `image` to its content bounds plus padding.

    Falls back to returning `image` itself (no copy, no error) when there is
    no foreground, or when the padded crop would be smaller than `min_size`
    on either side.
    """
    cfg = config or EngineConfig()
    pad  = cfg.crop_padding if padding is None else padding
    mins = cfg.crop_min_size if min_size is None else min_size

    bounds = find_content_bounds(
        image,
        alpha_threshold=cfg.alpha_threshold,
        whiteness_threshold=cfg.whiteness_threshold,
        background=background,
        tolerance=cfg.color_tolerance,
    )
    if bounds is None:
        logger.warning("Contour crop: no content found, keeping original image")
        return image

    w, h = image.size
    left   = max(0, bounds.left - pad)
    top    = max(0, bounds.top - pad)
    right  = min(w, bounds.right + 1 + pad)
    bottom = min(h, bounds.bottom + 1 + pad)

    crop_w, crop_h = right - left, bottom - top
    if crop_w < mins or crop_h < mins:
        logger.warning(
            f"Contour crop: {crop_w}x{crop_h} is below the {mins}px minimum, keeping original"
        )
        return image

    logger.debug(f"Contour crop: {w}x{h} → {crop_w}x{crop_h} at ({left},{top})")
    return image.crop((left, top, right, bottom))
