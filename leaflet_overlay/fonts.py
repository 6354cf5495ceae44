"""
fonts.py — Process-wide font registration with an explicit lifecycle.

Call FontRegistry.initialize() once at startup (optionally with a directory
of bundled .ttf/.otf files). Lookups before initialisation raise, and a second
initialize() raises instead of silently rescanning.

Devanagari and Tamil need Noto (or the Windows Mangal / Latha) faces; when
nothing matches, Pillow's built-in font is used and non-Latin glyphs may not
render.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from PIL import ImageFont

logger = logging.getLogger(__name__)

FONT_EXTS = {".ttf", ".otf", ".ttc"}

SYSTEM_FONT_DIRS = [
    "/usr/share/fonts",
    "/usr/local/share/fonts",
    "/System/Library/Fonts",
    "/Library/Fonts",
    "C:/Windows/Fonts",
]

# Preferred families per language, best first
LANGUAGE_FAMILIES: Dict[str, List[str]] = {
    "Hindi":   ["NotoSansDevanagari", "Mangal", "ArialUnicodeMS"],
    "Tamil":   ["NotoSansTamil", "Latha", "ArialUnicodeMS"],
    "English": ["Arial", "Helvetica", "DejaVuSans", "LiberationSans", "NotoSans"],
}


def _normalize(name: str) -> str:
    return name.lower().replace(" ", "").replace("_", "").replace("-", "")


class FontRegistry:
    """Index of font files by normalised stem, plus a per-size font cache."""

    def __init__(self) -> None:
        self._files: Dict[str, Path] = {}
        self._cache: Dict[Tuple[str, int], ImageFont.FreeTypeFont] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(
        self,
        fonts_dir: Optional[str] = None,
        include_system: bool = True,
    ) -> "FontRegistry":
        """Scan font directories once. Bundled fonts win over system fonts of the same name."""
        if self._initialized:
            raise RuntimeError("FontRegistry is already initialized")

        dirs: List[Path] = []
        if fonts_dir:
            dirs.append(Path(fonts_dir))
        if include_system:
            dirs.extend(Path(d) for d in SYSTEM_FONT_DIRS)

        for d in dirs:
            for path in self._scan(d):
                self._files.setdefault(_normalize(path.stem), path)

        self._initialized = True
        logger.info(f"Registered {len(self._files)} font files")
        return self

    @staticmethod
    def _scan(directory: Path) -> Iterable[Path]:
        if not directory.is_dir():
            return []
        return sorted(p for p in directory.rglob("*") if p.suffix.lower() in FONT_EXTS)

    def register(self, path: Path) -> None:
        """Add a single font file (e.g. one shipped alongside a layout)."""
        self._files[_normalize(Path(path).stem)] = Path(path)

    def find(self, language: str, bold: bool = False) -> Optional[Path]:
        """Best registered font file for a language and weight, or None."""
        families = LANGUAGE_FAMILIES.get(language, []) + LANGUAGE_FAMILIES["English"]
        suffixes = ["bold", "regular", ""] if bold else ["regular", "", "medium"]
        for family in families:
            for suffix in suffixes:
                path = self._files.get(_normalize(family) + suffix)
                if path is not None:
                    return path
        return None

    def get_font(self, language: str, size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
        if not self._initialized:
            raise RuntimeError("FontRegistry.initialize() must be called before get_font()")

        path = self.find(language, bold=bold)
        key = (str(path) if path else "<default>", size)
        font = self._cache.get(key)
        if font is not None:
            return font

        if path is not None:
            try:
                font = ImageFont.truetype(str(path), size)
            except OSError as exc:
                logger.warning(f"Could not load font {path.name}: {exc}")
        if font is None:
            logger.debug(f"No font for {language}; using Pillow default at {size}px")
            font = ImageFont.load_default(size=size)

        self._cache[key] = font
        return font
