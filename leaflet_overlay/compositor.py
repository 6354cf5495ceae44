"""
Compositor — applies pixel-exact logos and localized copy to a generated LBL.

Pipeline per call (one canvas, owned by the call):

  base raster ──► copy to canvas
                   │
  each LogoSpec ──►│ remove_background? ─► contour_crop?   (parallel per logo)
                   │            ── barrier ──
                   ├─► place_asset           (in given order)
  each TextSpec ──►├─► translate ─► render_text_region
                   ▼
               encode (PNG / JPEG)

All logos are on the canvas before the first text region is drawn.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from PIL import Image

from .background import remove_background
from .backend import PillowBackend, RasterBackend
from .codec import decode_raster, encode_raster
from .config import EngineConfig
from .contour_crop import contour_crop
from .errors import RasterDecodeError
from .fonts import FontRegistry
from .layouts import COMPONENT_LOGOS, DEFAULT_LAYOUT, LBL_LAYOUTS, get_layout
from .models import (
    Anchor,
    LogoSpec,
    OutputFormat,
    OverlayResult,
    Placement,
    Region,
    RegionKind,
    TextSpec,
)
from .placer import place_asset
from .text_renderer import render_text_region
from .translations import TRANSLATIONS, lookup

logger = logging.getLogger(__name__)

Overlay = Union[TextSpec, LogoSpec]


class Compositor:
    """
    Orchestrates extraction, cropping, placement and text rendering.

    Fonts, dictionaries and layouts are injected once and only read
    afterwards; each call owns its own canvas.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        fonts: Optional[FontRegistry] = None,
        translations: Optional[Mapping[str, Mapping[str, str]]] = None,
        layouts: Optional[Mapping[str, List[dict]]] = None,
        backend: Optional[RasterBackend] = None,
    ) -> None:
        if fonts is not None and not fonts.initialized:
            raise RuntimeError("FontRegistry must be initialized before building a Compositor")
        self.config = config or EngineConfig()
        self.fonts = fonts
        self.translations = TRANSLATIONS if translations is None else translations
        self.layouts = LBL_LAYOUTS if layouts is None else layouts
        self.backend = backend or PillowBackend()

    # ── Logos ────────────────────────────────────────────────────────────────

    def prepare_logo(self, spec: LogoSpec) -> Image.Image:
        """Extract foreground and/or contour-crop one logo. Never mutates spec.image."""
        logo = spec.image.convert("RGBA")
        if spec.remove_background:
            logo = remove_background(logo, spec.background_color, self.config)
        if spec.contour_crop:
            # After removal the alpha channel already marks the background
            crop_bg = None if spec.remove_background else spec.background_color
            logo = contour_crop(logo, self.config, background=crop_bg)
        logger.debug(f"Prepared logo '{spec.id}': {spec.image.size} → {logo.size}")
        return logo

    def logos_from_components(
        self,
        components: Iterable[Mapping[str, Any]],
        remove_logo_background: bool = False,
        include_slogan: bool = True,
    ) -> List[LogoSpec]:
        """
        Build LogoSpecs from stored brand components.

        Args:
            components:             Mappings with `component_id` and `image` (a
                                    PIL image, raw bytes or base64; `image_base64`
                                    is accepted too). The first entry per id wins.
            remove_logo_background: Extract the company / brand logos as well.
                                    The slogan is always extracted.
            include_slogan:         Place the slogan component when present.

        Returns:
            Company (top-left), brand (top-right) and slogan (top-center) specs,
            in that paint order, for the ids that are present. Ids with no
            logo role are skipped.
        """
        by_id: Dict[str, Mapping[str, Any]] = {}
        for component in components:
            by_id.setdefault(component["component_id"], component)

        specs: List[LogoSpec] = []
        for component_id, role in COMPONENT_LOGOS.items():
            component = by_id.get(component_id)
            if component is None:
                continue
            if role["role"] == "slogan" and not include_slogan:
                continue

            image = component.get("image", component.get("image_base64"))
            if image is None:
                raise RasterDecodeError(f"Component {component_id} has no image")
            if not isinstance(image, Image.Image):
                image = decode_raster(image)

            specs.append(LogoSpec(
                id=role["role"],
                component_id=component_id,
                region=Region.model_validate(role["region"]),
                image=image,
                anchor=Anchor(role["anchor"]),
                remove_background=role.get("remove_background", remove_logo_background),
            ))

        ignored = sorted(set(by_id) - set(COMPONENT_LOGOS))
        if ignored:
            logger.debug(f"Components without a logo role: {ignored}")
        return specs

    def _prepare_all(self, logos: Sequence[LogoSpec]) -> List[Image.Image]:
        workers = min(self.config.max_workers, len(logos))
        if workers <= 1:
            return [self.prepare_logo(spec) for spec in logos]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.prepare_logo, logos))

    # ── Text ─────────────────────────────────────────────────────────────────

    def resolve_text(self, spec: TextSpec, language: str) -> str:
        if spec.translated_text is not None:
            return spec.translated_text
        return lookup(spec.english_text, language, self.translations)

    # ── Composition ──────────────────────────────────────────────────────────

    @staticmethod
    def _split(overlays: Sequence[Overlay]) -> Tuple[List[LogoSpec], List[TextSpec]]:
        logos = [o for o in overlays if o.kind == RegionKind.LOGO]
        texts = [o for o in overlays if o.kind == RegionKind.TEXT]
        return logos, texts

    def compose_image(
        self,
        base: Image.Image,
        overlays: Sequence[Overlay] = (),
        language: str = "English",
    ) -> Tuple[Image.Image, List[Placement], int]:
        """
        Apply overlays to a copy of `base` without encoding.

        Returns:
            (RGBA canvas, logo placements in paint order, number of text regions drawn)
        """
        logos, texts = self._split(overlays)
        canvas = base.convert("RGBA")

        prepared = self._prepare_all(logos)

        placements: List[Placement] = []
        for spec, asset in zip(logos, prepared):
            padding = self.config.logo_padding if spec.padding is None else spec.padding
            canvas, placement = place_asset(
                canvas, asset, spec.region,
                anchor=spec.anchor, padding=padding, asset_id=spec.id, backend=self.backend,
            )
            placements.append(placement)

        for spec in texts:
            text = self.resolve_text(spec, language)
            canvas, lines = render_text_region(
                canvas, spec, text,
                fonts=self.fonts, language=language, config=self.config, backend=self.backend,
            )
            logger.debug(f"Text '{spec.id}': {len(lines)} line(s)")

        logger.info(
            f"Composited {len(placements)} logo(s) and {len(texts)} text region(s) "
            f"onto {canvas.width}x{canvas.height} [{language}]"
        )
        return canvas, placements, len(texts)

    def compose(
        self,
        base: Image.Image,
        overlays: Sequence[Overlay] = (),
        language: str = "English",
        output_format: Union[OutputFormat, str] = OutputFormat.PNG,
        quality: Optional[int] = None,
    ) -> OverlayResult:
        """Apply overlays and encode. JPEG quality defaults to config.jpeg_quality."""
        fmt = OutputFormat(output_format)
        canvas, placements, n_text = self.compose_image(base, overlays, language)

        declared = None
        if fmt is OutputFormat.JPEG:
            declared = self.config.jpeg_quality if quality is None else quality

        data = encode_raster(canvas, fmt, declared)
        return OverlayResult(
            data=data,
            format=fmt,
            quality=declared,
            width=canvas.width,
            height=canvas.height,
            placements=placements,
            text_regions_applied=n_text,
        )

    def layout_overlays(self, layout_id: str = DEFAULT_LAYOUT) -> List[TextSpec]:
        return get_layout(layout_id, self.layouts)

    def compose_layout(
        self,
        base: Image.Image,
        layout_id: str = DEFAULT_LAYOUT,
        language: str = "English",
        logos: Sequence[LogoSpec] = (),
        output_format: Union[OutputFormat, str] = OutputFormat.PNG,
        quality: Optional[int] = None,
    ) -> OverlayResult:
        """Compose a named layout's text regions plus any logos."""
        overlays: List[Overlay] = list(logos) + list(self.layout_overlays(layout_id))
        return self.compose(base, overlays, language, output_format, quality)

    def compose_bytes(
        self,
        image_data: Union[bytes, bytearray, memoryview, str],
        overlays: Optional[Sequence[Overlay]] = None,
        layout_id: Optional[str] = None,
        language: str = "English",
        logos: Sequence[LogoSpec] = (),
        output_format: Union[OutputFormat, str] = OutputFormat.PNG,
        quality: Optional[int] = None,
    ) -> OverlayResult:
        """
        Decode encoded/base64 input, then compose.

        Explicit `overlays` win over `layout_id`; with neither, the default
        layout is used.
        """
        base = decode_raster(image_data)
        if overlays is not None:
            return self.compose(base, list(logos) + list(overlays), language, output_format, quality)
        return self.compose_layout(
            base, layout_id or DEFAULT_LAYOUT, language, logos, output_format, quality,
        )


def overlay_summary(result: OverlayResult) -> Dict[str, object]:
    """JSON-friendly summary of a result (without the image bytes)."""
    return {
        "format":               result.format.value,
        "quality":              result.quality,
        "size":                 [result.width, result.height],
        "bytes":                len(result.data),
        "placements":           [p.__dict__ for p in result.placements],
        "text_regions_applied": result.text_regions_applied,
    }
