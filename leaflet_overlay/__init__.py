"""
Leaflet Overlay — region-based raster compositing for pharma leaf-brochures.

Pixel-exact logos and localized copy are applied on top of an AI-generated
leaflet after generation, so neither ever passes through the image model.
"""

from .background import detect_background_color, remove_background
from .codec import decode_raster, encode_raster, to_base64
from .compositor import Compositor, overlay_summary
from .config import EngineConfig
from .contour_crop import ContentBounds, contour_crop, find_content_bounds
from .errors import EncodeError, OverlayError, RasterDecodeError, UnknownLayoutError
from .fonts import FontRegistry
from .layouts import COMPONENT_LOGOS, DEFAULT_LAYOUT, LBL_LAYOUTS, get_layout, list_layouts
from .models import (
    Anchor,
    FontWeight,
    LogoSpec,
    OutputFormat,
    OverlayResult,
    OverlaySpec,
    Placement,
    Region,
    RegionKind,
    TextAlign,
    TextSpec,
)
from .placer import anchor_position, fit_within, place_asset
from .text_renderer import render_text_region, wrap_text
from .translations import TRANSLATIONS, lookup, translate_many

__version__ = "0.1.0"
