"""Drawing of text along a ribbon curve onto a glyph surface."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.ttLib import TTFont

from ribbon.consts import (
    DEFAULT_FILL_COLOR,
    DEFAULT_STROKE_COLOR,
    LETTER_PADDING_DIVISOR,
    LINE_JOIN,
    MITER_LIMIT,
    STROKE_WIDTH,
)
from ribbon.font import TextMeasurer, TTFontTextMeasurer
from ribbon.geom import GeomMath
from ribbon.layout import Placement, RibbonLayouter
from ribbon.page import RibbonSvgPage
from ribbon.sampler import CurveSampler
from ribbon.style import Ribbon, RibbonStyleTable

logger = logging.getLogger(__name__)


###############################################################################
# GlyphSurface
###############################################################################


class GlyphSurface(TextMeasurer, Protocol):
    """A drawing surface which measures text and draws single glyphs."""

    def draw_glyph(self, character: str, trafo: Sequence[float]) -> None:
        """
        Stroke, then fill _character_ with its baseline origin at (0, 0) of the
        affine transformation _trafo_ = [a00, a01, a10, a11, b0, b1].
        """


###############################################################################
# SvgGlyphSurface
###############################################################################


class SvgGlyphSurface:
    """
    GlyphSurface drawing glyph outlines of a TTFont as SVG paths onto a RibbonSvgPage.

    Every glyph is added twice: first as outline (stroke only) with a wide stroke,
    then filled on top of it.
    """

    def __init__(
        self,
        page: RibbonSvgPage,
        ttfont: TTFont,
        font_size: float,
        stroke_color: str = DEFAULT_STROKE_COLOR,
        fill_color: str = DEFAULT_FILL_COLOR,
    ) -> None:
        self._page = page
        self._measurer = TTFontTextMeasurer(ttfont, font_size)
        self._glyph_set = self._measurer.glyph_set
        self._stroke_color = stroke_color
        self._fill_color = fill_color

    @property
    def page(self) -> RibbonSvgPage:
        """The page glyphs are drawn onto."""
        return self._page

    @property
    def measurer(self) -> TTFontTextMeasurer:
        """The measurer matching the drawn glyphs."""
        return self._measurer

    def measure_text(self, text: str) -> float:
        """Returns the width of _text_ in pixels."""
        return self._measurer.measure_text(text)

    def glyph_path_string(self, character: str) -> str:
        """SVG path data of the glyph outline in font units (y pointing up)."""
        pen = SVGPathPen(self._glyph_set)
        self._glyph_set[self._measurer.glyph_name(character)].draw(pen)
        return pen.getCommands()

    def svg_matrix(self, trafo: Sequence[float]) -> str:
        """
        SVG transform for a glyph: scale font units to pixels, flip y to point down,
        then apply _trafo_.
        """
        a00, a01, a10, a11, b0, b1 = trafo
        scale = self._measurer.scale
        # svg matrix(a, b, c, d, e, f): x' = a*x + c*y + e, y' = b*x + d*y + f
        return (
            f"matrix({a00 * scale:.6f},{a10 * scale:.6f},{-a01 * scale:.6f},"
            f"{-a11 * scale:.6f},{b0:.6f},{b1:.6f})"
        )

    def draw_glyph(self, character: str, trafo: Sequence[float]) -> None:
        path_string = self.glyph_path_string(character)
        if not path_string:
            return  # nothing to draw, e.g. space
        transform = self.svg_matrix(trafo)
        scale = self._measurer.scale

        self._page.add(
            self._page.drawing.path(
                d=path_string,
                transform=transform,
                fill="none",
                stroke=self._stroke_color,
                stroke_width=STROKE_WIDTH / scale,
                stroke_linejoin=LINE_JOIN,
                stroke_miterlimit=MITER_LIMIT,
            )
        )
        self._page.add(
            self._page.drawing.path(
                d=path_string,
                transform=transform,
                fill=self._fill_color,
                stroke="none",
            )
        )


###############################################################################
# RibbonRenderer
###############################################################################


class RibbonRenderer:
    """
    Renders a name along a Ribbon.

    The curve is sampled completely before the layout starts. The padding
    between two letters is the width of a space divided by LETTER_PADDING_DIVISOR.
    """

    def __init__(self, sampler: Optional[CurveSampler] = None) -> None:
        self._sampler = sampler if sampler is not None else CurveSampler()

    @property
    def sampler(self) -> CurveSampler:
        """The sampler used for every ribbon."""
        return self._sampler

    @staticmethod
    def letter_padding(measurer: TextMeasurer) -> float:
        """Space between two letters in pixels."""
        return measurer.measure_text(" ") / LETTER_PADDING_DIVISOR

    def layout(self, name: str, ribbon: Ribbon, measurer: TextMeasurer) -> List[Placement]:
        """Compute the placements of _name_ on _ribbon_ without drawing."""
        ribbon.validate()
        table = self._sampler.sample(ribbon.curve)
        layouter = RibbonLayouter(table, measurer.measure_text, self.letter_padding(measurer))
        return layouter.layout(name, ribbon.max_chars)

    def render(self, name: str, ribbon: Ribbon, surface: GlyphSurface) -> List[Placement]:
        """
        Draw _name_ along _ribbon_ onto _surface_.

        Each character is drawn at its sample point, rotated by the sample angle.

        Returns:
            The placements that were drawn.
        """
        placements = self.layout(name, ribbon, surface)
        for placement in placements:
            trafo = GeomMath.rotate_translate(placement.angle, placement.x, placement.y)
            surface.draw_glyph(placement.character, trafo)
        logger.debug("Rendered %d glyphs of %r", len(placements), name)
        return placements


def draw_name(
    name: str,
    card_type: str,
    styles: RibbonStyleTable,
    surface: GlyphSurface,
    renderer: Optional[RibbonRenderer] = None,
) -> List[Placement]:
    """Resolve the Ribbon of _card_type_ and draw _name_ along it."""
    ribbon = styles.get(card_type)
    return (renderer or RibbonRenderer()).render(name, ribbon, surface)
