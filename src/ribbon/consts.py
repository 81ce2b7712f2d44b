"""Central module containing constants and defaults"""

from __future__ import annotations

from ribbon.common import AngleMode

# Sampling
DEFAULT_SAMPLE_COUNT: int = 1000
DEFAULT_ANGLE_MODE: AngleMode = AngleMode.ATAN2

# Ribbon
DEFAULT_MAX_CHARS: int = 50

# Letter padding is a fraction of the width of a space in the current font
LETTER_PADDING_DIVISOR: float = 8.0

# Rendering
STROKE_WIDTH: float = 7.0
MITER_LIMIT: float = 2.0
LINE_JOIN: str = "round"
DEFAULT_STROKE_COLOR: str = "black"
DEFAULT_FILL_COLOR: str = "black"
