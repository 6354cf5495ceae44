"""
config.py — Engine thresholds and defaults.

Every tuned number used by the pixel stages lives here with a documented
default. The background-removal thresholds and the 0.5 × font-size
character-width heuristic were tuned by eye on pharma logos and Devanagari /
Tamil claims; override them per deployment rather than editing the stages.

Environment overrides (read after load_dotenv()):
    LBL_COLOR_TOLERANCE=40
    LBL_NEAR_WHITE_CEILING=245
    LBL_CHAR_WIDTH_RATIO=0.5
    LBL_JPEG_QUALITY=90
    LBL_MAX_WORKERS=1
    LBL_FONTS_DIR=fonts
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

_ENV_PREFIX = "LBL_"


class EngineConfig(BaseModel):
    """Thresholds and defaults consumed by the compositor and its stages."""

    # ── Foreground extraction ────────────────────────────────────────────────
    color_tolerance: int = Field(
        default=40, ge=0,
        description="Per-channel tolerance; a pixel is background when its Manhattan RGB distance to the background is below 3 × this.",
    )
    near_white_ceiling: int = Field(
        default=245, ge=0, le=255,
        description="Pixels with luma brightness above this become transparent regardless of background color.",
    )
    sample_size: int = Field(
        default=5, ge=1,
        description="Side length in px of each corner patch sampled for background auto-detection.",
    )
    cluster_tolerance: int = Field(
        default=30, ge=0,
        description="Corner samples within 3 × this Manhattan distance are grouped together.",
    )

    # ── Contour crop ─────────────────────────────────────────────────────────
    alpha_threshold: int = Field(
        default=10, ge=0, le=256,
        description="Pixels with alpha below this count as transparent background.",
    )
    whiteness_threshold: int = Field(
        default=245, ge=0, le=256,
        description="Pixels with every RGB channel at or above this count as white background.",
    )
    crop_padding: int = Field(default=5, ge=0, description="Margin kept around content bounds, px.")
    crop_min_size: int = Field(
        default=20, ge=1,
        description="Crops narrower or shorter than this fall back to the uncropped asset.",
    )

    # ── Placement ────────────────────────────────────────────────────────────
    logo_padding: int = Field(default=20, ge=0, description="Default logo edge padding, px.")

    # ── Text ─────────────────────────────────────────────────────────────────
    char_width_ratio: float = Field(
        default=0.5, gt=0,
        description="Average glyph width as a fraction of font size, used for word-wrap.",
    )
    default_line_height: float = Field(default=1.4, gt=0, description="Line height multiplier.")
    default_background_padding: int = Field(default=5, ge=0, description="Backdrop padding, px.")
    background_sample_size: int = Field(
        default=15, ge=1,
        description="Half-size of the patch averaged when sampling an infill color.",
    )
    ellipsis: str = Field(default="...", description="Appended to the last line when max_lines truncates.")

    # ── Output ───────────────────────────────────────────────────────────────
    jpeg_quality: int = Field(default=90, ge=1, le=100)
    max_workers: int = Field(
        default=1, ge=1,
        description="Worker threads for per-logo extract/crop. 1 = sequential.",
    )
    fonts_dir: Optional[str] = Field(
        default=None,
        description="Directory of .ttf/.otf files registered once at startup.",
    )

    @classmethod
    def from_env(cls, **overrides) -> "EngineConfig":
        """Build a config from LBL_* environment variables (and .env), then apply overrides."""
        load_dotenv()
        values: dict = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{_ENV_PREFIX}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw
        values.update(overrides)
        return cls.model_validate(values)
