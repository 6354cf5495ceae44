"""Tests for word-wrap, truncation, colour sampling and region rendering."""

import numpy as np
from PIL import Image

from leaflet_overlay.layouts import get_layout
from leaflet_overlay.models import Region, TextAlign, TextSpec
from leaflet_overlay.text_renderer import (
    max_chars_per_line,
    render_text_region,
    sample_color,
    truncate_lines,
    wrap_text,
)

CLAIM = "Quick onset of action within 5 mins"
LONG = "Reduces exacerbations by a clinically meaningful margin in moderate to severe COPD patients"


class TestWrapText:
    def test_char_budget(self):
        assert max_chars_per_line(250, 13) == 38
        assert max_chars_per_line(250, 13, char_width_ratio=1.0) == 19

    def test_short_text_is_one_line(self):
        assert wrap_text(CLAIM, 250, 13) == [CLAIM]

    def test_lines_respect_budget(self):
        limit = max_chars_per_line(120, 12)
        lines = wrap_text(LONG, 120, 12)
        assert len(lines) > 1
        assert all(len(line) <= limit for line in lines)
        assert " ".join(lines) == LONG

    def test_overlong_word_is_kept_whole(self):
        assert wrap_text("Supercalifragilistic short", 20, 10) == ["Supercalifragilistic", "short"]

    def test_empty_text(self):
        assert wrap_text("", 200, 12) == []
        assert wrap_text("   ", 200, 12) == []


class TestTruncateLines:
    def test_cut_marks_last_line(self):
        assert truncate_lines(["a", "b", "c"], 2) == ["a", "b..."]

    def test_within_limit_is_unchanged(self):
        assert truncate_lines(["a", "b"], 2) == ["a", "b"]
        assert truncate_lines(["a", "b"], None) == ["a", "b"]

    def test_custom_ellipsis(self):
        assert truncate_lines(["a", "b"], 1, ellipsis="…") == ["a…"]


class TestSampleColor:
    def test_patch_average(self):
        img = Image.new("RGB", (100, 100), (200, 0, 0))
        img.paste((0, 0, 200), (50, 0, 100, 100))
        assert sample_color(img, 20, 50, size=10) == (200, 0, 0)
        assert sample_color(img, 80, 50, size=10) == (0, 0, 200)

    def test_clamped_at_canvas_edge(self):
        img = Image.new("RGB", (30, 30), (5, 6, 7))
        assert sample_color(img, -40, -40, size=15) == (5, 6, 7)


class TestRenderTextRegion:
    def test_claim_on_canonical_leaflet(self, leaflet):
        spec = get_layout("nebzmart-horizontal")[1]
        out, lines = render_text_region(leaflet, spec, CLAIM)
        assert lines == [CLAIM]

        # backdrop spans the padded region box for one line
        assert out.getpixel((476, 752)) == (254, 254, 254, 255)
        assert out.getpixel((470, 752)) == (100, 100, 100, 255)
        assert out.getpixel((476, 790)) == (100, 100, 100, 255)

        # glyphs drawn inside the region
        arr = np.asarray(out)[756:775, 480:730, :3].astype(int)
        assert (arr.sum(axis=-1) < 400).any()

    def test_canvas_not_modified(self, leaflet):
        before = leaflet.tobytes()
        render_text_region(leaflet, get_layout("nebzmart-horizontal")[0], "Headline")
        assert leaflet.tobytes() == before

    def test_max_lines_truncates_with_ellipsis(self, leaflet):
        spec = TextSpec(
            id="t", english_text=LONG, font_size=24, max_lines=1,
            region=Region(x=10, y=10, width=10, height=10),
        )
        _, lines = render_text_region(leaflet, spec, LONG)
        assert len(lines) == 1
        assert lines[0].endswith("...")

    def test_empty_text_draws_nothing(self, leaflet):
        spec = TextSpec(
            id="t", english_text="", font_size=20, background_color="#ff0000",
            region=Region(x=10, y=10, width=30, height=10),
        )
        out, lines = render_text_region(leaflet, spec, "")
        assert lines == []
        assert out.tobytes() == leaflet.tobytes()

    def test_cover_is_filled_with_sampled_color(self, small_canvas):
        canvas = small_canvas.copy()
        canvas.paste((0, 0, 0, 255), (100, 20, 160, 50))
        area = Region(x=50, y=20, width=30, height=30)
        spec = TextSpec(id="c", english_text="", font_size=12, region=area, cover=area)
        out, _ = render_text_region(canvas, spec, "")
        arr = np.asarray(out)
        assert (arr == np.array([10, 200, 10, 255], dtype=np.uint8)).all()

    def test_sampled_backdrop_overrides_background_color(self, small_canvas):
        spec = TextSpec(
            id="s", english_text="x", font_size=120, background_color="#ff0000",
            sample_background=True, region=Region(x=50, y=50, width=40, height=30),
        )
        out, _ = render_text_region(small_canvas, spec, "x")
        assert (255, 0, 0, 255) not in {out.getpixel((x, 48)) for x in range(96, 180)}

    def test_uses_font_registry(self, leaflet, empty_fonts):
        spec = get_layout("nebzmart-horizontal")[1]
        _, lines = render_text_region(leaflet, spec, "5 मिनट में तेज़ असर", fonts=empty_fonts, language="Hindi")
        assert lines == ["5 मिनट में तेज़ असर"]


class TestAlignment:
    """Each wrapped line is anchored on its own within the 480..1440 box."""

    FONT_PX = 40
    BOX = Region(x=25, y=10, width=50, height=20)

    def _line_extents(self, align):
        canvas = Image.new("RGBA", (1920, 1080), (255, 255, 255, 255))
        spec = TextSpec(id="a", english_text=LONG, font_size=self.FONT_PX, text_align=align, region=self.BOX)
        out, lines = render_text_region(canvas, spec, LONG)
        assert len(lines) == 2

        ink = np.asarray(out)[:, :, :3].astype(int).sum(axis=-1) < 384
        extents = []
        for i in range(len(lines)):
            # x-height band above each baseline; line height is 1.4 x 40px
            baseline = 108 + self.FONT_PX + i * 56
            cols = np.flatnonzero(ink[baseline - 24:baseline].any(axis=0))
            assert cols.size
            extents.append((cols.min(), cols.max()))
        return extents

    def test_left(self):
        for left, _ in self._line_extents(TextAlign.LEFT):
            assert 480 <= left <= 492

    def test_right(self):
        for _, right in self._line_extents(TextAlign.RIGHT):
            assert 1428 <= right <= 1440

    def test_center(self):
        extents = self._line_extents(TextAlign.CENTER)
        for left, right in extents:
            assert abs((left + right) / 2 - 960) <= 15
        # lines differ in length, so a shared block anchor would misplace one of them
        assert extents[0][1] - extents[0][0] != extents[1][1] - extents[1][0]
