"""Layout of characters along the arc length of a sampled curve."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List

from ribbon.common import InvalidConfigurationError
from ribbon.sampler import SampleTable

logger = logging.getLogger(__name__)

MeasureText = Callable[[str], float]


###############################################################################
# Placement
###############################################################################


@dataclass(frozen=True)
class Placement:
    """Resolved position and rotation of one character on the curve."""

    character: str
    x: float
    y: float
    angle: float  # radians
    sample_index: int

    @property
    def angle_degrees(self) -> float:
        """The rotation angle in degrees."""
        return math.degrees(self.angle)


###############################################################################
# Helpers
###############################################################################


def round_half_up(value: float) -> float:
    """Round to the nearest whole number, halves away from -inf (like a canvas Math.round)."""
    return float(math.floor(value + 0.5))


def find_start_index(table: SampleTable, total_length: float) -> int:
    """
    Index of the first sample whose cumulative distance reaches the point where
    text of _total_length_ has to start to be centered on the curve.

    Falls back to the last index if no sample reaches that point.
    """
    center_target = table.total_length / 2 - total_length / 2
    cumulative_dists = table.cumulative_dists
    for index in range(len(table)):
        if cumulative_dists[index] >= center_target:
            logger.debug("Center target %.3f reached at sample %d", center_target, index)
            return index
    logger.warning("No sample reaches center target %.3f, starting at the last sample", center_target)
    return table.last_index


def advance_index(table: SampleTable, index: int, advance: float) -> int:
    """
    Walk forward from sample _index_ until the distance covered reaches _advance_.

    The distances of the samples after _index_ are summed up one by one; the first
    sample where the sum is >= _advance_ is returned. Returns -1 if the table ends
    before that.
    """
    segment_dists = table.segment_dists
    covered = 0.0
    for next_index in range(index + 1, len(table)):
        covered += segment_dists[next_index]
        if covered >= advance:
            return next_index
    return -1


###############################################################################
# RibbonLayouter
###############################################################################


class RibbonLayouter:
    """
    Layouts a string along a sampled curve, centered on the curve's arc length.

    Algorithm:
        1. Truncate the text to max_chars characters (hard cut).
        2. Measure the whole string once, round to whole pixels and add
           (n - 1) * padding to get the total length.
        3. Start at the first sample whose cumulative distance is
           >= total_curve_length / 2 - total_length / 2.
        4. For every character:
            * place it on the current sample (position and angle)
            * advance by measure_text(character) + padding along the curve

    Special Cases:
        - Empty text: no placements, nothing is measured
        - Text longer than the curve: starts at sample 0 and runs off the end
        - Running off the end: all remaining characters stack on the last sample
    """

    def __init__(self, table: SampleTable, measure_text: MeasureText, padding: float = 0.0) -> None:
        """
        Initialize the layouter.

        Args:
            table: Samples of the curve to layout along
            measure_text: Returns the rendered width of a string in pixels.
                Must use the same font setting for whole strings and single characters.
            padding: Additional space between two characters in pixels
        """
        self._table = table
        self._measure_text = measure_text
        self._padding = padding

    @property
    def table(self) -> SampleTable:
        """The samples this layouter works on."""
        return self._table

    @property
    def padding(self) -> float:
        """Space between two characters in pixels."""
        return self._padding

    def total_length(self, text: str) -> float:
        """Rendered length of _text_ including the padding between its characters."""
        if not text:
            return 0.0
        pixel_width = round_half_up(self._measure_text(text))
        total_padding = (len(text) - 1) * self._padding
        return pixel_width + total_padding

    def layout(self, text: str, max_chars: int) -> List[Placement]:
        """
        Layout _text_ along the curve.

        Returns:
            One Placement per rendered character, in string order.

        Raises:
            InvalidConfigurationError: If max_chars is negative.
        """
        if max_chars < 0:
            raise InvalidConfigurationError(f"max_chars must not be negative, got {max_chars}")

        ribbon_text = text[:max_chars]
        if not ribbon_text:
            return []

        total_length = self.total_length(ribbon_text)
        index = find_start_index(self._table, total_length)
        logger.debug(
            "Layout %r: total length %.3f on curve of length %.3f, start sample %d",
            ribbon_text,
            total_length,
            self._table.total_length,
            index,
        )

        placements: List[Placement] = []
        overrun = False
        last_char = len(ribbon_text) - 1
        for char_index, character in enumerate(ribbon_text):
            sample = self._table[index]
            placements.append(Placement(character, sample.x, sample.y, sample.angle, index))

            advance = self._measure_text(character) + self._padding
            next_index = advance_index(self._table, index, advance)
            if next_index < 0:
                next_index = self._table.last_index
                # only matters if another character has to be placed
                overrun = overrun or char_index < last_char
            index = next_index

        if overrun:
            logger.warning("Text %r runs off the end of the curve", ribbon_text)
        return placements


def layout_text(
    table: SampleTable,
    text: str,
    max_chars: int,
    measure_text: MeasureText,
    padding: float = 0.0,
) -> List[Placement]:
    """Layout _text_ (truncated to max_chars) centered along the sampled curve."""
    return RibbonLayouter(table, measure_text, padding).layout(text, max_chars)
