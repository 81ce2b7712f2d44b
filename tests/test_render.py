"""Test module for ribbon.render and ribbon.page

The tests are run using pytest.
"""

import math
import re
from typing import List, Sequence, Tuple

import pytest

from ribbon.font import MappingTextMeasurer
from ribbon.geom import CubicCurve, GeomMath
from ribbon.page import RibbonSvgPage
from ribbon.render import RibbonRenderer, SvgGlyphSurface, draw_name
from ribbon.sampler import CurveSampler
from ribbon.style import Ribbon, RibbonStyleTable


class RecordingSurface:
    """GlyphSurface which records the draw calls."""

    def __init__(self, widths):
        self._measurer = MappingTextMeasurer(widths)
        self.calls: List[Tuple[str, Sequence[float]]] = []

    def measure_text(self, text: str) -> float:
        return self._measurer.measure_text(text)

    def draw_glyph(self, character: str, trafo: Sequence[float]) -> None:
        self.calls.append((character, list(trafo)))


@pytest.fixture(name="arch_ribbon")
def fixture_arch_ribbon(arch_curve) -> Ribbon:
    """Arch ribbon with the default character limit."""
    return Ribbon(arch_curve)


class TestGeomMathTrafo:
    """The affine transformation used to place glyphs."""

    def test_translation_only(self):
        """Angle 0 only moves the origin."""
        assert GeomMath.rotate_translate(0.0, 10.0, 20.0) == pytest.approx([1, 0, 0, 1, 10, 20])

    def test_rotation_quarter_turn(self):
        """A quarter turn maps the baseline direction (1, 0) onto +y (downwards on a canvas)."""
        a00, a01, a10, a11, b0, b1 = GeomMath.rotate_translate(math.pi / 2, 10.0, 20.0)
        assert (a00, a10) == pytest.approx((0, 1), abs=1e-12)
        assert (a01, a11) == pytest.approx((-1, 0), abs=1e-12)
        assert (b0, b1) == (10.0, 20.0)


class TestRibbonRenderer:
    """Rendering onto a recording surface."""

    def test_letter_padding(self):
        """Padding is an eighth of the width of a space."""
        assert RibbonRenderer.letter_padding(MappingTextMeasurer({" ": 8})) == pytest.approx(1.0)

    def test_render_draws_every_placement(self, arch_ribbon):
        """Every placement is drawn in order at its sample point."""
        surface = RecordingSurface({"A": 10, "B": 12, " ": 4})
        placements = RibbonRenderer().render("AB BA", arch_ribbon, surface)

        assert [character for character, _ in surface.calls] == list("AB BA")
        for placement, (_, trafo) in zip(placements, surface.calls):
            assert trafo == pytest.approx(GeomMath.rotate_translate(placement.angle, placement.x, placement.y))

    def test_layout_uses_padding(self, arch_ribbon):
        """The renderer lays out with padding measure(' ') / 8."""
        measurer = MappingTextMeasurer({"A": 10, " ": 16})
        placements = RibbonRenderer().layout("AA", arch_ribbon, measurer)
        # advance of the first letter is 10 + 2 along the curve
        first, second = placements
        distance = math.hypot(second.x - first.x, second.y - first.y)
        assert 11.5 < distance < 12.5

    def test_max_chars_applied(self, arch_curve):
        """Names are cut at the ribbon's character limit."""
        surface = RecordingSurface({"A": 3})
        placements = RibbonRenderer().render("A" * 20, Ribbon(arch_curve, max_chars=5), surface)
        assert len(placements) == 5
        assert len(surface.calls) == 5

    def test_custom_sampler(self, arch_ribbon):
        """The renderer samples with the sampler it is given."""
        renderer = RibbonRenderer(CurveSampler(sample_count=10))
        assert renderer.sampler.sample_count == 10
        placements = renderer.layout("AB", arch_ribbon, MappingTextMeasurer({"A": 5, "B": 5}))
        assert all(0 <= p.sample_index <= 10 for p in placements)

    def test_draw_name_resolves_card_type(self, arch_ribbon):
        """draw_name looks up the ribbon before rendering."""
        styles = RibbonStyleTable({"monster": arch_ribbon})
        surface = RecordingSurface({"A": 10})
        placements = draw_name("AAA", "monster", styles, surface)
        assert len(placements) == 3
        assert len(surface.calls) == 3


class TestSvgGlyphSurface:
    """Rendering TTFont glyph outlines into an SVG page."""

    def test_measure_text(self, test_font):
        """The surface measures with the advance widths of its font."""
        surface = SvgGlyphSurface(RibbonSvgPage(300, 200), test_font, 20)
        assert surface.measure_text("AB") == pytest.approx(24)
        assert surface.measurer.scale == pytest.approx(0.02)

    def test_default_colors(self, test_font):
        """Without explicit colors glyphs are stroked and filled black."""
        page = RibbonSvgPage(300, 200)
        surface = SvgGlyphSurface(page, test_font, 20)
        surface.draw_glyph("A", GeomMath.rotate_translate(0.0, 10.0, 20.0))
        stroke_path, fill_path = re.findall(r"<path [^>]*>", page.tostring())
        assert 'stroke="black"' in stroke_path
        assert 'fill="black"' in fill_path

    def test_svg_matrix(self, test_font):
        """Font units are scaled to pixels and flipped before the glyph trafo."""
        surface = SvgGlyphSurface(RibbonSvgPage(300, 200), test_font, 20)
        matrix = surface.svg_matrix(GeomMath.rotate_translate(0.0, 10.0, 20.0))
        assert matrix == "matrix(0.020000,0.000000,0.000000,-0.020000,10.000000,20.000000)"

    def test_glyph_path_string(self, test_font):
        """Glyph outlines are converted to SVG path data, empty for a space."""
        surface = SvgGlyphSurface(RibbonSvgPage(300, 200), test_font, 20)
        assert surface.glyph_path_string("A").startswith("M")
        assert surface.glyph_path_string(" ") == ""

    def test_render_strokes_then_fills(self, test_font, arch_ribbon):
        """Every visible glyph gives an outline path followed by a filled path."""
        page = RibbonSvgPage(300, 200)
        surface = SvgGlyphSurface(page, test_font, 20, stroke_color="navy", fill_color="gold")
        placements = RibbonRenderer().render("Ai B", arch_ribbon, surface)
        assert len(placements) == 4

        svg = page.tostring()
        paths = re.findall(r"<path [^>]*>", svg)
        assert len(paths) == 6  # the space has no outline
        for stroke_path, fill_path in zip(paths[0::2], paths[1::2]):
            assert 'fill="none"' in stroke_path
            assert 'stroke="navy"' in stroke_path
            assert 'stroke-linejoin="round"' in stroke_path
            assert 'fill="gold"' in fill_path

    def test_page_tostring(self):
        """An empty page is a valid SVG document with the main layer."""
        page = RibbonSvgPage(300, 200)
        svg = page.tostring(pretty=True)
        assert svg.startswith("<?xml")
        assert 'viewBox="0 0 300 200"' in svg
        assert "main" in svg

    def test_tostring_does_not_change_page(self, test_font, arch_ribbon):
        """Serializing twice gives the same document."""
        page = RibbonSvgPage(300, 200)
        RibbonRenderer().render("AB", arch_ribbon, SvgGlyphSurface(page, test_font, 16))
        assert page.tostring() == page.tostring()


def test_straight_ribbon_letters_on_line():
    """On a horizontal line all glyphs sit on y=50 without rotation."""
    ribbon = Ribbon(CubicCurve((0, 50), (100, 50), (200, 50), (300, 50)), max_chars=10)
    surface = RecordingSurface({"A": 10})
    placements = RibbonRenderer().render("AAAA", ribbon, surface)
    assert all(p.y == pytest.approx(50) for p in placements)
    assert all(p.angle == 0.0 for p in placements)
