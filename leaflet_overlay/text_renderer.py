"""
text_renderer.py — Draw localized copy into a percentage region.

Wrapping uses a script-agnostic width estimate (avg glyph ≈ 0.5 × font size,
configurable) instead of real text shaping.

Paint order inside a region:
  1. optional cover area (hides the AI-drawn English copy)
  2. optional backdrop rectangle sized to the wrapped lines
  3. the lines themselves, each anchored independently to left / centre / right
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image, ImageFont

from .backend import PillowBackend, RasterBackend
from .config import EngineConfig
from .fonts import FontRegistry
from .geometry import PixelBox, font_scale, resolve_region, round_half_up, scale_font
from .models import FontWeight, TextAlign, TextSpec

_ANCHORS = {
    TextAlign.LEFT:   "ls",
    TextAlign.CENTER: "ms",
    TextAlign.RIGHT:  "rs",
}

# Infill colour is sampled this far outside the area's left edge
_SAMPLE_OFFSET = 20


# ── Wrapping ──────────────────────────────────────────────────────────────────

def max_chars_per_line(width_px: float, font_px: float, char_width_ratio: float = 0.5) -> int:
    avg_char_w = font_px * char_width_ratio
    if avg_char_w <= 0:
        return max(1, int(width_px))
    return int(math.floor(width_px / avg_char_w))


def wrap_text(
    text: str,
    width_px: float,
    font_px: float,
    char_width_ratio: float = 0.5,
) -> List[str]:
    """
    Greedy word-wrap by character count.

    A line never exceeds max_chars_per_line() unless it is a single word that
    is longer than the limit by itself; words are never split.
    """
    limit = max_chars_per_line(width_px, font_px, char_width_ratio)
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and len(candidate) > limit:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def truncate_lines(lines: List[str], max_lines: Optional[int], ellipsis: str = "...") -> List[str]:
    """Keep the first max_lines lines; mark the cut with an ellipsis on the last one."""
    if not max_lines or len(lines) <= max_lines:
        return list(lines)
    kept = lines[:max_lines]
    kept[-1] = kept[-1] + ellipsis
    return kept


# ── Colour sampling ──────────────────────────────────────────────────────────

def sample_color(canvas: Image.Image, x: int, y: int, size: int = 15) -> Tuple[int, int, int]:
    """Average RGB of the (2·size)² patch around (x, y), clamped to the canvas."""
    w, h = canvas.size
    x0 = min(max(0, x - size), w - 1)
    y0 = min(max(0, y - size), h - 1)
    x1 = max(x0 + 1, min(w, x + size))
    y1 = max(y0 + 1, min(h, y + size))
    patch = np.asarray(canvas.convert("RGB").crop((x0, y0, x1, y1)), dtype=np.float64)
    avg = patch.reshape(-1, 3).mean(axis=0)
    return tuple(round_half_up(c) for c in avg)


# ── Rendering ─────────────────────────────────────────────────────────────────

def _line_x(box: PixelBox, align: TextAlign) -> float:
    if align is TextAlign.CENTER:
        return box.x + box.width / 2
    if align is TextAlign.RIGHT:
        return box.right
    return box.x


def render_text_region(
    canvas: Image.Image,
    spec: TextSpec,
    text: str,
    fonts: Optional[FontRegistry] = None,
    language: str = "English",
    config: Optional[EngineConfig] = None,
    backend: Optional[RasterBackend] = None,
) -> Tuple[Image.Image, List[str]]:
    """
    Render `text` into `spec.region` on a copy of `canvas`.

    Args:
        canvas:   Base raster. Not modified.
        spec:     Region geometry and style. Font size is in canonical points.
        text:     Already-localized string to draw.
        fonts:    Initialized FontRegistry; Pillow's default font when None.
        language: Selects the script-appropriate font family.
        config:   Wrap ratio, default line height / padding, ellipsis.

    Returns:
        (new RGBA canvas, the wrapped lines actually drawn)
    """
    cfg = config or EngineConfig()
    backend = backend or PillowBackend()
    out = canvas.convert("RGBA")
    cw, ch = out.size

    box = resolve_region(spec.region, cw, ch)
    font_px = scale_font(spec.font_size, font_scale(cw, ch))
    line_h = font_px * (spec.line_height or cfg.default_line_height)
    pad = cfg.default_background_padding if spec.background_padding is None else spec.background_padding

    lines = truncate_lines(
        wrap_text(text, box.width, font_px, cfg.char_width_ratio),
        spec.max_lines,
        cfg.ellipsis,
    )

    cover = resolve_region(spec.cover, cw, ch) if spec.cover is not None else None
    fill = spec.background_color
    if spec.sample_background:
        area = cover or box
        fill = sample_color(out, area.x - _SAMPLE_OFFSET, area.y + _SAMPLE_OFFSET, cfg.background_sample_size)

    if cover is not None:
        cover_fill = fill if fill is not None else sample_color(
            out, cover.x - _SAMPLE_OFFSET, cover.y + _SAMPLE_OFFSET, cfg.background_sample_size
        )
        backend.fill_rect(out, (cover.x, cover.y, cover.right, cover.bottom), cover_fill)

    if fill is not None and lines:
        backend.fill_rect(
            out,
            (box.x - pad, box.y - pad, box.right + pad, box.y - pad + len(lines) * line_h + 2 * pad),
            fill,
        )

    if fonts is not None:
        font = fonts.get_font(language, font_px, bold=spec.font_weight is FontWeight.BOLD)
    else:
        font = ImageFont.load_default(size=font_px)

    x = _line_x(box, spec.text_align)
    anchor = _ANCHORS[spec.text_align]
    for i, line in enumerate(lines):
        backend.draw_text(out, (x, box.y + font_px + i * line_h), line, font, spec.color, anchor)

    return out, lines
