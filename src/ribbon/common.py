"""Central module containing types, enums and exceptions for ribbon text layout."""

from __future__ import annotations

from enum import Enum, auto
from typing import Tuple

###############################################################################
# Types
###############################################################################


Point = Tuple[float, float]  # (x, y) in device pixel space, y pointing down


###############################################################################
# Enums
###############################################################################


class AngleMode(Enum):
    """Enum to define how the rotation angle is derived from a curve tangent.

    ATAN reproduces atan(dy/dx), which cannot tell a tangent pointing left from
    one pointing right (glyphs never turn upside down).
    ATAN2 uses the quadrant-aware atan2(dy, dx).
    """

    ATAN = auto()
    ATAN2 = auto()


###############################################################################
# Exceptions
###############################################################################


class RibbonError(Exception):
    """Base exception for ribbon layout errors."""


class InvalidConfigurationError(RibbonError):
    """Raised when a curve, sample count or style definition cannot be used."""
