"""
models.py — Overlay data model.

Every overlay is a tagged variant: a Region carries the geometry, and the
payload is either a TextSpec or a LogoSpec selected by `kind`. Layout tables
and CLI/JSON input validate into these models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field


# ── Enums ─────────────────────────────────────────────────────────────────────

class RegionKind(str, Enum):
    LOGO = "logo"
    TEXT = "text"


class Anchor(str, Enum):
    TOP_LEFT   = "top-left"
    TOP_RIGHT  = "top-right"
    TOP_CENTER = "top-center"


class TextAlign(str, Enum):
    LEFT   = "left"
    CENTER = "center"
    RIGHT  = "right"


class FontWeight(str, Enum):
    NORMAL = "normal"
    BOLD   = "bold"


class OutputFormat(str, Enum):
    PNG  = "png"
    JPEG = "jpeg"


# ── Geometry ──────────────────────────────────────────────────────────────────

class Region(BaseModel):
    """Layout rectangle in percent of the target image (0–100)."""
    x: float = Field(ge=0, description="Left edge, % of image width")
    y: float = Field(ge=0, description="Top edge, % of image height")
    width: float = Field(ge=0, description="% of image width")
    height: float = Field(ge=0, description="% of image height")


# ── Payloads ──────────────────────────────────────────────────────────────────

class TextSpec(BaseModel):
    """A localized text block rendered into a region."""
    kind: Literal[RegionKind.TEXT] = RegionKind.TEXT
    id: str
    region: Region
    english_text: str = Field(description="Canonical English phrase; also the translation key")
    translated_text: Optional[str] = Field(
        default=None,
        description="Explicit localized text. When set, dictionary lookup is skipped.",
    )
    font_size: float = Field(gt=0, description="Canonical points at 1920×1080")
    font_weight: FontWeight = FontWeight.NORMAL
    text_align: TextAlign = TextAlign.LEFT
    color: str = "#000000"
    background_color: Optional[str] = None
    background_padding: Optional[int] = Field(default=None, ge=0)
    line_height: Optional[float] = Field(default=None, gt=0, description="Multiplier of font size")
    max_lines: Optional[int] = Field(default=None, ge=1)
    cover: Optional[Region] = Field(
        default=None,
        description="Area painted before the text, typically hiding the AI-drawn English copy",
    )
    sample_background: bool = Field(
        default=False,
        description="Fill cover/backdrop with a color sampled just left of the area instead of background_color",
    )


class LogoSpec(BaseModel):
    """A decoded logo raster placed into a region."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal[RegionKind.LOGO] = RegionKind.LOGO
    id: str
    component_id: Optional[str] = None
    region: Region = Field(description="width/height = max size; y = top for the top-center anchor")
    image: Image.Image
    anchor: Anchor = Anchor.TOP_LEFT
    padding: Optional[int] = Field(default=None, ge=0, description="Edge padding, px")
    remove_background: bool = False
    background_color: Optional[str] = Field(
        default=None,
        description="Fixed background color; auto-detected from the corners when None",
    )
    contour_crop: bool = False


OverlaySpec = Annotated[Union[TextSpec, LogoSpec], Field(discriminator="kind")]


# ── Results ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Placement:
    """Where an asset was actually drawn on the canvas."""
    id: str
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.x + self.width, self.y + self.height


@dataclass
class OverlayResult:
    data: bytes
    format: OutputFormat
    quality: Optional[int]                                   # JPEG only
    width: int
    height: int
    placements: List[Placement] = field(default_factory=list)
    text_regions_applied: int = 0
