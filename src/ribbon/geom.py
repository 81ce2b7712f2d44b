"""Handling geometries"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

import numpy as np
from numpy.typing import NDArray

from ribbon.common import InvalidConfigurationError, Point


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to geometry handling."""

    @staticmethod
    def rotate_translate(angle: float, translate_x: float, translate_y: float) -> List[float]:
        """
        Affine transformation which first rotates by _angle_ (radians) around the origin
        and then moves the origin to (translate_x, translate_y).

        Equivalent to a canvas translate() followed by rotate(). A point (x, y) maps to
            x' = a00 * x + a01 * y + b0
            y' = a10 * x + a11 * y + b1

        Returns:
            List[float]: [a00, a01, a10, a11, b0, b1]
        """
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return [cos_a, -sin_a, sin_a, cos_a, translate_x, translate_y]


###############################################################################
# CubicCurve
###############################################################################
@dataclass(frozen=True)
class CubicCurve:
    """
    A single cubic Bezier segment given by its start point, two control points and end point.

    Coordinates are in device pixel space (left-to-right, top-to-bottom).
    The curve is an immutable, hashable value.

    Attributes:
        start (Point): The start point.
        control1 (Point): The first control point.
        control2 (Point): The second control point.
        end (Point): The end point.
    """

    _start: Point
    _control1: Point
    _control2: Point
    _end: Point

    def __init__(self, start: Point, control1: Point, control2: Point, end: Point):
        object.__setattr__(self, "_start", (float(start[0]), float(start[1])))
        object.__setattr__(self, "_control1", (float(control1[0]), float(control1[1])))
        object.__setattr__(self, "_control2", (float(control2[0]), float(control2[1])))
        object.__setattr__(self, "_end", (float(end[0]), float(end[1])))

    @property
    def start(self) -> Point:
        """Point: The start point of the curve."""
        return self._start

    @property
    def control1(self) -> Point:
        """Point: The first control point of the curve."""
        return self._control1

    @property
    def control2(self) -> Point:
        """Point: The second control point of the curve."""
        return self._control2

    @property
    def end(self) -> Point:
        """Point: The end point of the curve."""
        return self._end

    @property
    def points(self) -> NDArray[np.float64]:
        """The control points as array of shape (4, 2): start, control1, control2, end."""
        return np.array([self._start, self._control1, self._control2, self._end], dtype=np.float64)

    def is_finite(self) -> bool:
        """True if every coordinate is a finite number."""
        return bool(np.all(np.isfinite(self.points)))

    def validate(self) -> None:
        """
        Check that the curve can be sampled.

        Raises:
            InvalidConfigurationError: If any coordinate is NaN or infinite.
        """
        if not self.is_finite():
            raise InvalidConfigurationError(f"Curve control points must be finite: {self}")

    @staticmethod
    def _point_from_dict(data: dict, key: str) -> Point:
        point = data.get(key)
        if point is None:
            raise InvalidConfigurationError(f"Curve definition misses point '{key}'")
        try:
            if isinstance(point, dict):
                return (float(point["x"]), float(point["y"]))
            return (float(point[0]), float(point[1]))
        except (KeyError, IndexError, TypeError, ValueError) as err:
            raise InvalidConfigurationError(f"Invalid point '{key}' in curve definition: {point!r}") from err

    @classmethod
    def from_dict(cls, data: dict) -> CubicCurve:
        """
        Create a CubicCurve instance from a dictionary.

        Accepts the short card-style keys (start, c1, c2, end) as well as the long
        keys (start, control1, control2, end). Points are either {"x": .., "y": ..}
        or a pair [x, y].

        Raises:
            InvalidConfigurationError: If _data_ is not a dictionary or a point is missing or malformed.
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationError(f"Curve definition must be a dictionary, got {data!r}")
        control1_key = "control1" if "control1" in data else "c1"
        control2_key = "control2" if "control2" in data else "c2"
        return cls(
            start=cls._point_from_dict(data, "start"),
            control1=cls._point_from_dict(data, control1_key),
            control2=cls._point_from_dict(data, control2_key),
            end=cls._point_from_dict(data, "end"),
        )

    def to_dict(self) -> dict:
        """Convert the CubicCurve instance to a dictionary."""
        return {
            "start": {"x": self._start[0], "y": self._start[1]},
            "control1": {"x": self._control1[0], "y": self._control1[1]},
            "control2": {"x": self._control2[0], "y": self._control2[1]},
            "end": {"x": self._end[0], "y": self._end[1]},
        }

    def __str__(self):
        return (
            f"CubicCurve(start={self._start}, control1={self._control1}, "
            f"control2={self._control2}, end={self._end})"
        )
