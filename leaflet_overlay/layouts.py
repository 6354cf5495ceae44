"""
layouts.py — Static text-region layouts for the horizontal LBL templates.

Each layout is an ordered list of text regions authored against a 1920×1080
leaflet. English text doubles as the translation key. Backdrops are tinted to
match the areas of the AI-generated leaflet they sit on, so the localized copy
covers the English underneath.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from .errors import UnknownLayoutError
from .models import TextSpec

DEFAULT_LAYOUT = "nebzmart-horizontal"

_HEADLINE = "COPD patients highly symptomatic and requiring high dose of ICS"
_DISCLAIMER = "For the use of a Registered Medical Practitioner or a Hospital or a Laboratory only"


def _claim(region_id: str, text: str, x: float, width: float) -> dict:
    return {
        "id": region_id, "english_text": text,
        "region": {"x": x, "y": 70, "width": width, "height": 15},
        "font_size": 13, "font_weight": "bold", "text_align": "center",
        "color": "#1a365d", "background_color": "#fefefe", "background_padding": 6,
        "max_lines": 4, "line_height": 1.3,
    }


LBL_LAYOUTS: Dict[str, List[dict]] = {
    "nebzmart-horizontal": [
        {
            "id": "headline", "english_text": _HEADLINE,
            "region": {"x": 3, "y": 7, "width": 94, "height": 6},
            "font_size": 26, "font_weight": "bold", "text_align": "center",
            "color": "#c84c28", "background_color": "#f7f3ed", "background_padding": 12,
        },
        _claim("claim1", "Quick onset of action within 5 mins", 25, 13),
        _claim("claim2", "12 hrs long lasting relief", 39, 13),
        _claim("claim3", "Reduces exacerbations by 12%-15%", 53, 15),
        _claim("claim4", "Improves lung function by 120 ml", 69, 15),
        {
            "id": "disclaimer", "english_text": _DISCLAIMER,
            "region": {"x": 12, "y": 93, "width": 76, "height": 5},
            "font_size": 12, "font_weight": "normal", "text_align": "center",
            "color": "#2d2d2d", "background_color": "#e8e4dc", "background_padding": 8,
        },
    ],
    "alphacept-horizontal": [
        {
            "id": "headline", "english_text": _HEADLINE,
            "region": {"x": 3, "y": 7, "width": 94, "height": 6},
            "font_size": 26, "font_weight": "bold", "text_align": "center",
            "color": "#c84c28", "background_color": "#f7f3ed", "background_padding": 12,
        },
        {
            "id": "disclaimer", "english_text": _DISCLAIMER,
            "region": {"x": 12, "y": 93, "width": 76, "height": 5},
            "font_size": 12, "font_weight": "normal", "text_align": "center",
            "color": "#2d2d2d", "background_color": "#e8e4dc", "background_padding": 8,
        },
    ],
    "generic-horizontal": [
        {
            "id": "headline", "english_text": _HEADLINE,
            "region": {"x": 3, "y": 7, "width": 94, "height": 6},
            "font_size": 24, "font_weight": "bold", "text_align": "center",
            "color": "#1a365d", "background_color": "#f5f5f5", "background_padding": 10,
        },
        {
            "id": "disclaimer", "english_text": _DISCLAIMER,
            "region": {"x": 10, "y": 93, "width": 80, "height": 5},
            "font_size": 11, "font_weight": "normal", "text_align": "center",
            "color": "#333333", "background_color": "#eeeeee", "background_padding": 8,
        },
    ],
}


# Stored brand components that become logos, in paint order.
# component_id → role, anchor, max box (% of leaflet; y is the top for top-center)
COMPONENT_LOGOS: Dict[str, dict] = {
    "COMM_04": {
        "role": "company", "anchor": "top-left",
        "region": {"x": 0, "y": 0, "width": 12, "height": 15},
    },
    "INIT_01a": {
        "role": "brand", "anchor": "top-right",
        "region": {"x": 0, "y": 0, "width": 12, "height": 15},
    },
    "INIT_08": {
        "role": "slogan", "anchor": "top-center", "remove_background": True,
        "region": {"x": 0, "y": 18, "width": 35, "height": 10},
    },
}


def get_layout(
    layout_id: str,
    layouts: Optional[Mapping[str, List[dict]]] = None,
) -> List[TextSpec]:
    """Validated TextSpecs for a layout, in paint order. Raises UnknownLayoutError."""
    table = LBL_LAYOUTS if layouts is None else layouts
    if layout_id not in table:
        raise UnknownLayoutError(layout_id, sorted(table))
    return [TextSpec.model_validate(r) for r in table[layout_id]]


def list_layouts(layouts: Optional[Mapping[str, List[dict]]] = None) -> List[dict]:
    """Summaries: id, display name ("nebzmart-horizontal" → "Nebzmart Horizontal"), region count."""
    table = LBL_LAYOUTS if layouts is None else layouts
    return [
        {
            "id":           layout_id,
            "name":         layout_id.replace("-", " ").title(),
            "region_count": len(regions),
        }
        for layout_id, regions in table.items()
    ]
