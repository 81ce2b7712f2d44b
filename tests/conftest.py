"""Shared fixtures for the ribbon tests.

Fonts are built in memory with fontTools.fontBuilder, no font files are needed.
"""

import io

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from ribbon.geom import CubicCurve

UNITS_PER_EM = 1000

# advance widths in font units
ADVANCE_WIDTHS = {
    ".notdef": 500,
    "space": 250,
    "A": 600,
    "B": 600,
    "i": 300,
}


def _box_glyph(width: int, height: int):
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, height))
    pen.lineTo((width - 50, height))
    pen.lineTo((width - 50, 0))
    pen.closePath()
    return pen.glyph()


def build_test_font() -> TTFont:
    """Build a small TrueType font with the glyphs space, A, B and i."""
    builder = FontBuilder(UNITS_PER_EM, isTTF=True)
    builder.setupGlyphOrder(list(ADVANCE_WIDTHS))
    builder.setupCharacterMap({ord(" "): "space", ord("A"): "A", ord("B"): "B", ord("i"): "i"})
    builder.setupGlyf(
        {
            ".notdef": _box_glyph(500, 700),
            "space": TTGlyphPen(None).glyph(),
            "A": _box_glyph(600, 700),
            "B": _box_glyph(600, 700),
            "i": _box_glyph(300, 500),
        }
    )
    builder.setupHorizontalMetrics({name: (width, 50) for name, width in ADVANCE_WIDTHS.items()})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "Ribbon Test", "styleName": "Regular"})
    builder.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    builder.setupPost()

    # compile and reload to get a font as if read from a file
    buffer = io.BytesIO()
    builder.save(buffer)
    buffer.seek(0)
    return TTFont(buffer)


@pytest.fixture(name="test_font")
def fixture_test_font() -> TTFont:
    """In-memory TrueType font."""
    return build_test_font()


@pytest.fixture(name="arch_curve")
def fixture_arch_curve() -> CubicCurve:
    """Symmetric arch from (0,100) to (200,100) bulging upwards."""
    return CubicCurve((0, 100), (50, 0), (150, 0), (200, 100))


@pytest.fixture(name="line_curve")
def fixture_line_curve() -> CubicCurve:
    """Straight line from (0,0) to (100,0) with uniform parametrization."""
    return CubicCurve((0, 0), (100 / 3, 0), (200 / 3, 0), (100, 0))
