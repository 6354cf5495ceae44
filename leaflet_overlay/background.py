"""
background.py — Foreground extraction for logos and slogan images.

A heuristic threshold matte, not colour-science matting:

  1. Background colour is either supplied or inferred from the four corners.
     Corner patches are grouped by Manhattan distance and the largest group is
     averaged, so one corner landing on the logo does not skew the result.
  2. A pixel is cleared (alpha → 0) when it is close to the background colour
     OR brighter than the near-white ceiling. The second rule catches the
     washed-out edges of scanned / JPEG-compressed logos.
  3. RGB is never touched, only alpha, so alpha blending downstream still has
     the original edge colours.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageColor

from .config import EngineConfig

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
ColorLike = Union[str, RGB]


def parse_color(color: ColorLike) -> RGB:
    """Any Pillow colour string ('#fefefe', 'rgb(1,2,3)', 'white') or RGB tuple → RGB."""
    if isinstance(color, str):
        rgb = ImageColor.getrgb(color)
    else:
        rgb = tuple(color)
    return int(rgb[0]), int(rgb[1]), int(rgb[2])


def _brightness(arr: np.ndarray) -> np.ndarray:
    return 0.299 * arr[..., 0] + 0.587 * arr[..., 1] + 0.114 * arr[..., 2]


def _manhattan(arr: np.ndarray, color: RGB) -> np.ndarray:
    rgb = arr[..., :3].astype(np.int32)
    return np.abs(rgb - np.array(color, dtype=np.int32)).sum(axis=-1)


def _corner_samples(arr: np.ndarray, size: int) -> List[np.ndarray]:
    h, w = arr.shape[:2]
    sy, sx = min(size, h), min(size, w)
    patches = [
        arr[:sy, :sx],            # top-left
        arr[:sy, w - sx:],        # top-right
        arr[h - sy:, :sx],        # bottom-left
        arr[h - sy:, w - sx:],    # bottom-right
    ]
    return [p[..., :3].reshape(-1, 3).astype(np.float64).mean(axis=0) for p in patches]


def detect_background_color(
    image: Image.Image,
    sample_size: int = 5,
    cluster_tolerance: int = 30,
) -> RGB:
    """
    Infer the background colour from the four corners by majority cluster.

    Args:
        image:             Source raster (any mode).
        sample_size:       Side of the square patch averaged at each corner.
        cluster_tolerance: Samples within 3 × this Manhattan distance group together.

    Returns:
        Rounded (r, g, b) average of the largest group. The first largest group
        wins on ties.
    """
    arr = np.asarray(image.convert("RGB"))
    samples = _corner_samples(arr, sample_size)

    best: List[np.ndarray] = []
    for i, a in enumerate(samples):
        group = [a] + [
            b for j, b in enumerate(samples)
            if i != j and np.abs(a - b).sum() < cluster_tolerance * 3
        ]
        if len(group) > len(best):
            best = group

    avg = np.mean(best, axis=0)
    color = tuple(int(np.floor(c + 0.5)) for c in avg)
    logger.debug(f"Detected background colour: RGB{color} ({len(best)}/4 corners agree)")
    return color


def remove_background(
    image: Image.Image,
    background: Optional[ColorLike] = None,
    config: Optional[EngineConfig] = None,
) -> Image.Image:
    """
    Return a copy of `image` with background pixels made fully transparent.

    Args:
        image:      Source raster. Not modified.
        background: Fixed background colour, or None to auto-detect from corners.
        config:     Thresholds (color_tolerance, near_white_ceiling, sample_size,
                    cluster_tolerance). Defaults to EngineConfig().

    Returns:
        RGBA raster of identical size. A uniform image comes back fully
        transparent; callers must cope with a blank logo.
    """
    cfg = config or EngineConfig()
    rgba = image.convert("RGBA")

    if background is None:
        bg = detect_background_color(rgba, cfg.sample_size, cfg.cluster_tolerance)
    else:
        bg = parse_color(background)

    arr = np.array(rgba)
    clear = (_manhattan(arr, bg) < cfg.color_tolerance * 3) | (
        _brightness(arr[..., :3].astype(np.float32)) > cfg.near_white_ceiling
    )
    arr[..., 3] = np.where(clear, 0, arr[..., 3])

    if clear.all():
        logger.warning("Background removal cleared every pixel; logo will be blank")
    return Image.fromarray(arr)
