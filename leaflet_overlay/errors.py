"""
errors.py — Exceptions surfaced to callers of the overlay engine.

Only unrecoverable conditions raise. Missing foreground, out-of-bounds
geometry, and missing translations resolve locally with a fallback value.
"""

from __future__ import annotations


class OverlayError(Exception):
    """Base class for every error raised by leaflet_overlay."""


class RasterDecodeError(OverlayError):
    """Image bytes could not be decoded into a raster."""


class EncodeError(OverlayError):
    """The composited canvas could not be encoded to the requested format."""


class UnknownLayoutError(OverlayError):
    """Requested layout id is not present in the layout table."""

    def __init__(self, layout_id: str, available: list) -> None:
        self.layout_id = layout_id
        self.available = list(available)
        super().__init__(
            f"Unknown layout '{layout_id}'. Available: {', '.join(self.available) or 'none'}"
        )
