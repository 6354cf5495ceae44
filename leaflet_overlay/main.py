"""
Leaflet Overlay — command line

Usage:
  python -m leaflet_overlay.main overlay leaflet.png --language Hindi --out leaflet_hi.png
  python -m leaflet_overlay.main overlay leaflet.png --logo company.png:top-left:remove-bg:crop \\
                                         --logo brand.png:top-right --format jpeg --quality 85
  python -m leaflet_overlay.main overlay leaflet.png --texts regions.json --language Tamil
  python -m leaflet_overlay.main overlay leaflet.png --component COMM_04=company.png \\
                                         --component INIT_01a=brand.png --component INIT_08=slogan.png
  python -m leaflet_overlay.main layouts
  python -m leaflet_overlay.main translate --language Hindi "5 mins" "12 hrs"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Set, Tuple

from dotenv import load_dotenv
from PIL import Image
from pydantic import TypeAdapter
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from .compositor import Compositor
from .config import EngineConfig
from .errors import OverlayError
from .fonts import FontRegistry
from .layouts import COMPONENT_LOGOS, DEFAULT_LAYOUT, list_layouts
from .models import Anchor, LogoSpec, OutputFormat, Region, TextSpec
from .translations import supported_languages, translate_many

load_dotenv()

console = Console()
logger = logging.getLogger(__name__)

# Logo box used by --logo, as % of the leaflet
LOGO_MAX_WIDTH  = 12.0
LOGO_MAX_HEIGHT = 15.0

_LOGO_FLAGS = {"remove-bg", "crop"}
_ANCHORS = {a.value for a in Anchor}


# ── Argument parsing ──────────────────────────────────────────────────────────

def split_logo_arg(value: str) -> Tuple[str, Anchor, Set[str]]:
    """
    Split PATH[:ANCHOR][:remove-bg][:crop] into (path, anchor, flags).

    Options are taken off the right end only, so a path may itself contain
    colons (e.g. a Windows drive letter).
    """
    path = value
    anchor: Optional[Anchor] = None
    flags: Set[str] = set()
    while ":" in path:
        head, token = path.rsplit(":", 1)
        if token in _LOGO_FLAGS:
            flags.add(token)
        elif token in _ANCHORS and anchor is None:
            anchor = Anchor(token)
        else:
            break
        path = head
    return path, anchor or Anchor.TOP_LEFT, flags


def parse_logo_arg(value: str, index: int = 0) -> LogoSpec:
    """
    Parse PATH[:ANCHOR][:remove-bg][:crop] into a LogoSpec.

    The image is loaded eagerly so a bad path fails before any compositing.
    """
    raw_path, anchor, flags = split_logo_arg(value)
    path = Path(raw_path)
    if not path.exists():
        raise argparse.ArgumentTypeError(
            f"Logo not found: {path} (anchors: {sorted(_ANCHORS)}, flags: {sorted(_LOGO_FLAGS)})"
        )

    with Image.open(path) as img:
        image = img.convert("RGBA")
    return LogoSpec(
        id=f"logo{index + 1}-{path.stem}",
        region=Region(x=0, y=0, width=LOGO_MAX_WIDTH, height=LOGO_MAX_HEIGHT),
        image=image,
        anchor=anchor,
        remove_background="remove-bg" in flags,
        contour_crop="crop" in flags,
    )


def load_component_arg(value: str) -> dict:
    """Parse COMPONENT_ID=PATH into a component mapping with a loaded image."""
    component_id, sep, raw_path = value.partition("=")
    path = Path(raw_path)
    if not sep or not component_id:
        raise argparse.ArgumentTypeError(f"Expected COMPONENT_ID=PATH, got '{value}'")
    if not path.exists():
        raise argparse.ArgumentTypeError(f"Component image not found: {path}")
    with Image.open(path) as img:
        return {"component_id": component_id, "image": img.convert("RGBA")}


def load_text_regions(path: Path) -> List[TextSpec]:
    """Read a JSON array of text regions (same shape as the built-in layouts)."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    return TypeAdapter(List[TextSpec]).validate_python(raw)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Leaflet Overlay — pixel-exact logos and localized copy on LBL images"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    ov = sub.add_parser("overlay", help="Composite logos and text onto a leaflet")
    ov.add_argument("image", help="Base leaflet image (PNG/JPEG/WebP)")
    ov.add_argument("--out", "-o", default=None, help="Output path (default: <image>_<language>.<ext>)")
    ov.add_argument("--layout", default=DEFAULT_LAYOUT, help="Built-in text layout id")
    ov.add_argument("--texts", default=None, help="JSON file of text regions; replaces --layout")
    ov.add_argument("--no-text", action="store_true", help="Place logos only")
    ov.add_argument("--language", default="English", help="Target language for the copy")
    ov.add_argument(
        "--logo", action="append", default=[],
        help="PATH[:top-left|top-right|top-center][:remove-bg][:crop]  (repeatable, painted in order)",
    )
    ov.add_argument(
        "--component", action="append", default=[],
        help=f"COMPONENT_ID=PATH brand component ({', '.join(COMPONENT_LOGOS)}), placed by role",
    )
    ov.add_argument("--remove-logo-bg", action="store_true", help="Extract company/brand component logos")
    ov.add_argument("--no-slogan", action="store_true", help="Skip the slogan component")
    ov.add_argument("--format", choices=[f.value for f in OutputFormat], default=OutputFormat.PNG.value)
    ov.add_argument("--quality", type=int, default=None, help="JPEG quality (default from config)")
    ov.add_argument("--fonts-dir", default=None, help="Extra directory of .ttf/.otf fonts")
    ov.add_argument("--workers", type=int, default=None, help="Threads for logo preparation")

    sub.add_parser("layouts", help="List built-in text layouts")

    tr = sub.add_parser("translate", help="Look up translations for English phrases")
    tr.add_argument("texts", nargs="+", help="English phrases")
    tr.add_argument("--language", required=True, help=f"One of: {', '.join(supported_languages())}")
    tr.add_argument("--json", action="store_true", help="Print raw JSON instead of a table")

    return parser.parse_args(argv)


# ── Commands ──────────────────────────────────────────────────────────────────

def _default_output(image: Path, language: str, fmt: OutputFormat) -> Path:
    ext = "jpg" if fmt is OutputFormat.JPEG else "png"
    return image.with_name(f"{image.stem}_{language.lower()}.{ext}")


def cmd_overlay(args: argparse.Namespace) -> int:
    overrides = {}
    if args.fonts_dir:
        overrides["fonts_dir"] = args.fonts_dir
    if args.workers:
        overrides["max_workers"] = args.workers
    config = EngineConfig.from_env(**overrides)
    logger.debug(f"Engine config: {config.model_dump()}")

    image_path = Path(args.image)
    fmt = OutputFormat(args.format)
    out_path = Path(args.out) if args.out else _default_output(image_path, args.language, fmt)

    components = [load_component_arg(value) for value in args.component]
    extra_logos = [parse_logo_arg(value, i) for i, value in enumerate(args.logo)]

    fonts = FontRegistry().initialize(config.fonts_dir)
    compositor = Compositor(config=config, fonts=fonts)

    logos = compositor.logos_from_components(
        components,
        remove_logo_background=args.remove_logo_bg,
        include_slogan=not args.no_slogan,
    ) + extra_logos

    if args.no_text:
        texts: List[TextSpec] = []
    elif args.texts:
        texts = load_text_regions(Path(args.texts))
    else:
        texts = compositor.layout_overlays(args.layout)

    console.print(Rule("[bold magenta]Leaflet Overlay[/bold magenta]"))
    console.print(
        f"  Image: [bold]{image_path}[/bold]  |  "
        f"Language: [bold]{args.language}[/bold]  |  "
        f"Logos: [bold]{len(logos)}[/bold]  |  "
        f"Text regions: [bold]{len(texts)}[/bold]"
    )

    t0 = time.time()
    result = compositor.compose_bytes(
        image_path.read_bytes(),
        overlays=list(logos) + list(texts),
        language=args.language,
        output_format=fmt,
        quality=args.quality,
    )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(result.data)

    for p in result.placements:
        console.print(f"  [green]✓[/green] {p.id} → ({p.x}, {p.y}) {p.width}×{p.height}")

    quality = f", quality {result.quality}" if result.quality is not None else ""
    console.print(
        Panel(
            f"{result.width}×{result.height} {result.format.value.upper()}{quality} "
            f"in [bold]{time.time() - t0:.2f}s[/bold]\n"
            f"Saved to: [bold]{out_path}[/bold]",
            title="[bold green]Overlay Complete[/bold green]",
            border_style="green",
        )
    )
    return 0


def cmd_layouts(args: argparse.Namespace) -> int:
    table = Table(title="Text layouts")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Regions", justify="right")
    for entry in list_layouts():
        table.add_row(entry["id"], entry["name"], str(entry["region_count"]))
    console.print(table)
    return 0


def cmd_translate(args: argparse.Namespace) -> int:
    results = translate_many(args.texts, args.language)
    if args.json:
        console.print_json(json.dumps(results, ensure_ascii=False))
        return 0

    table = Table(title=f"English → {args.language}")
    table.add_column("Original")
    table.add_column("Translated")
    table.add_column("", justify="center")
    for r in results:
        mark = "[green]✓[/green]" if r["has_translation"] else "[yellow]–[/yellow]"
        table.add_row(r["original"], r["translated"], mark)
    console.print(table)
    return 0


_COMMANDS = {
    "overlay":   cmd_overlay,
    "layouts":   cmd_layouts,
    "translate": cmd_translate,
}


# ── Main ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s — %(levelname)s — %(name)s — %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    try:
        return _COMMANDS[args.command](args)
    except (OverlayError, ValueError, argparse.ArgumentTypeError, OSError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
