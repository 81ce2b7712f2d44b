"""Bezier curve evaluation utilities for points and tangents of cubic curves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
from numpy.typing import NDArray

from ribbon.common import Point
from ribbon.geom import CubicCurve


@dataclass(frozen=True)
class CurvePoint:
    """Position and first derivative of a curve at parameter t."""

    t: float
    x: float
    y: float
    tangent_x: float
    tangent_y: float


class BezierCurve:
    """Class to evaluate quadratic and cubic Bezier curves.

    Provides pure Python methods for a single parameter t and a NumPy
    implementation evaluating a whole array of parameters at once.
    Both produce the same values.
    """

    @classmethod
    def quadratic_point(cls, t: float, pt0: Point, pt1: Point, pt2: Point) -> Tuple[float, float]:
        """
        Point of the quadratic Bezier curve (pt0, pt1, pt2) at parameter t.

        B(t) = (1-t)^2*P0 + 2*(1-t)*t*P1 + t^2*P2
        """
        omt = 1.0 - t
        x = omt * omt * pt0[0] + 2.0 * omt * t * pt1[0] + t * t * pt2[0]
        y = omt * omt * pt0[1] + 2.0 * omt * t * pt1[1] + t * t * pt2[1]
        return (x, y)

    @classmethod
    def cubic_point(cls, t: float, curve: CubicCurve) -> Tuple[float, float]:
        """
        Point of the cubic Bezier curve at parameter t.

        Uses the de Casteljau construction: the cubic is the linear interpolation
        between the quadratic (start, control1, control2) and the quadratic
        (control1, control2, end).
        """
        q1x, q1y = cls.quadratic_point(t, curve.start, curve.control1, curve.control2)
        q2x, q2y = cls.quadratic_point(t, curve.control1, curve.control2, curve.end)
        omt = 1.0 - t
        return (omt * q1x + t * q2x, omt * q1y + t * q2y)

    @classmethod
    def cubic_tangent(cls, t: float, curve: CubicCurve) -> Tuple[float, float]:
        """
        First derivative of the cubic Bezier curve at parameter t.

        B'(t) = 3*(1-t)^2*(P1-P0) + 6*(1-t)*t*(P2-P1) + 3*t^2*(P3-P2)
        """
        (p0x, p0y), (p1x, p1y), (p2x, p2y), (p3x, p3y) = curve.start, curve.control1, curve.control2, curve.end
        omt = 1.0 - t
        dx = 3.0 * omt * omt * (p1x - p0x) + 6.0 * omt * t * (p2x - p1x) + 3.0 * t * t * (p3x - p2x)
        dy = 3.0 * omt * omt * (p1y - p0y) + 6.0 * omt * t * (p2y - p1y) + 3.0 * t * t * (p3y - p2y)
        return (dx, dy)

    @classmethod
    def evaluate(cls, t: float, curve: CubicCurve) -> CurvePoint:
        """
        Evaluate position and tangent of the cubic curve at parameter t.

        t outside [0, 1] extrapolates the curve.
        """
        x, y = cls.cubic_point(t, curve)
        tangent_x, tangent_y = cls.cubic_tangent(t, curve)
        return CurvePoint(t=t, x=x, y=y, tangent_x=tangent_x, tangent_y=tangent_y)

    @classmethod
    def evaluate_numpy(cls, t: Union[NDArray[np.float64], float], curve: CubicCurve) -> NDArray[np.float64]:
        """
        Evaluate position and tangent of the cubic curve for an array of parameters.

        Args:
            t: Parameters to evaluate, shape (n,)
            curve: The cubic curve

        Returns:
            NDArray[np.float64] of shape (n, 4) containing (x, y, tangent_x, tangent_y)
        """
        t = np.atleast_1d(np.asarray(t, dtype=np.float64))
        points = curve.points
        omt = 1.0 - t

        # de Casteljau: two quadratics, then a linear interpolation between them
        omt2 = omt * omt
        two_omt_t = 2.0 * omt * t
        t2 = t * t
        quad1 = np.outer(omt2, points[0]) + np.outer(two_omt_t, points[1]) + np.outer(t2, points[2])
        quad2 = np.outer(omt2, points[1]) + np.outer(two_omt_t, points[2]) + np.outer(t2, points[3])
        position = omt[:, np.newaxis] * quad1 + t[:, np.newaxis] * quad2

        tangent = (
            np.outer(3.0 * omt2, points[1] - points[0])
            + np.outer(6.0 * omt * t, points[2] - points[1])
            + np.outer(3.0 * t2, points[3] - points[2])
        )

        result = np.empty((len(t), 4), dtype=np.float64)
        result[:, 0:2] = position
        result[:, 2:4] = tangent
        return result
