"""Text measurement for ribbon layout based on OpenType/TrueType fonts."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Protocol

from fontTools.ttLib import TTFont

logger = logging.getLogger(__name__)

NOTDEF_GLYPH = ".notdef"


###############################################################################
# TextMeasurer
###############################################################################


class TextMeasurer(Protocol):
    """Capability returning the rendered width of a string in pixels."""

    def measure_text(self, text: str) -> float:
        """Returns the width of _text_ in pixels for the configured font and size."""


###############################################################################
# TTFontTextMeasurer
###############################################################################


class TTFontTextMeasurer:
    """
    Measures text by the advance widths of a fontTools TTFont.

    Widths are taken from the 'hmtx' table in unitsPerEm and scaled by
    font_size / unitsPerEm. The width of a string is the sum of the advance
    widths of its characters. Characters missing in the font's cmap are
    measured (and drawn) as '.notdef'.
    """

    def __init__(self, ttfont: TTFont, font_size: float) -> None:
        """
        Initialize the measurer.

        Args:
            ttfont (TTFont): The font to measure with.
            font_size (float): Font size in pixels, i.e. the size of one em.
        """
        self._ttfont = ttfont
        self._font_size = font_size
        self._units_per_em = float(ttfont["head"].unitsPerEm)  # type: ignore
        self._cmap: Dict[int, str] = ttfont.getBestCmap() or {}
        self._hmtx = ttfont["hmtx"]
        self._missing_reported: set[str] = set()

    @property
    def ttfont(self) -> TTFont:
        """The font used for measuring."""
        return self._ttfont

    @property
    def font_size(self) -> float:
        """Font size in pixels."""
        return self._font_size

    @property
    def units_per_em(self) -> float:
        """Units per em of the font."""
        return self._units_per_em

    @property
    def scale(self) -> float:
        """Scale factor from font units to pixels (font_size / unitsPerEm)."""
        return self._font_size / self._units_per_em

    @property
    def glyph_set(self):
        """The glyph set of the font, used to draw glyph outlines."""
        return self._ttfont.getGlyphSet()

    def glyph_name(self, character: str) -> str:
        """Name of the glyph used for _character_ ('.notdef' if the font has none)."""
        glyph_name = self._cmap.get(ord(character))
        if glyph_name is None:
            if character not in self._missing_reported:
                self._missing_reported.add(character)
                logger.warning("Character %r not in font, using %s", character, NOTDEF_GLYPH)
            return NOTDEF_GLYPH
        return glyph_name

    def advance_width(self, character: str) -> float:
        """Advance width of a single character in font units."""
        advance, _lsb = self._hmtx[self.glyph_name(character)]
        return float(advance)

    def measure_text(self, text: str) -> float:
        """Returns the width of _text_ in pixels."""
        return sum(self.advance_width(character) for character in text) * self.scale


###############################################################################
# MappingTextMeasurer
###############################################################################


class MappingTextMeasurer:
    """
    Measures text from known character widths.

    A string is measured by looking it up in _strings_ first and otherwise by
    summing up the widths of its characters. Characters not in _widths_
    have _default_width_.
    """

    def __init__(
        self,
        widths: Mapping[str, float],
        default_width: float = 0.0,
        strings: Optional[Mapping[str, float]] = None,
    ) -> None:
        self._widths = dict(widths)
        self._default_width = default_width
        self._strings = dict(strings) if strings else {}

    def measure_text(self, text: str) -> float:
        """Returns the width of _text_ in pixels."""
        if text in self._strings:
            return self._strings[text]
        return sum(self._widths.get(character, self._default_width) for character in text)
