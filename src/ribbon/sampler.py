"""Arc-length sampling of cubic Bezier curves."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from ribbon.bezier import BezierCurve
from ribbon.common import AngleMode, InvalidConfigurationError
from ribbon.consts import DEFAULT_ANGLE_MODE, DEFAULT_SAMPLE_COUNT
from ribbon.geom import CubicCurve

logger = logging.getLogger(__name__)

# Column layout of the sample array
_COL_T = 0
_COL_X = 1
_COL_Y = 2
_COL_TANGENT_X = 3
_COL_TANGENT_Y = 4
_COL_SEGMENT_DIST = 5
_COL_CUMULATIVE_DIST = 6
_COL_ANGLE = 7
_NUM_COLS = 8


###############################################################################
# CurveSample
###############################################################################


@dataclass(frozen=True)
class CurveSample:
    """
    One sample of a curve at a fixed parameter t.

    Attributes:
        index: Position of the sample inside its SampleTable
        t: Curve parameter
        x, y: Position on the curve
        tangent_x, tangent_y: First derivative at t
        segment_dist: Distance to the previous sample (0 for the first sample)
        cumulative_dist: Sum of segment_dist up to and including this sample
        angle: Rotation angle in radians derived from the tangent
    """

    index: int
    t: float
    x: float
    y: float
    tangent_x: float
    tangent_y: float
    segment_dist: float
    cumulative_dist: float
    angle: float


###############################################################################
# SampleTable
###############################################################################


class SampleTable:
    """
    Immutable, ordered table of curve samples with increasing t.

    The samples are stored in a read-only NumPy array of shape (n, 8) with the
    columns t, x, y, tangent_x, tangent_y, segment_dist, cumulative_dist, angle.
    Indexing returns CurveSample objects.
    """

    def __init__(self, data: NDArray[np.float64]) -> None:
        if data.ndim != 2 or data.shape[1] != _NUM_COLS or data.shape[0] == 0:
            raise ValueError(f"Sample data must have shape (n, {_NUM_COLS}) with n > 0, got {data.shape}")
        self._data = np.array(data, dtype=np.float64)
        self._data.setflags(write=False)

    def __len__(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: int) -> CurveSample:
        count = len(self)
        if index < 0:
            index += count
        if not 0 <= index < count:
            raise IndexError(f"Sample index {index} out of range for table of {count} samples")
        row = self._data[index]
        return CurveSample(
            index=index,
            t=float(row[_COL_T]),
            x=float(row[_COL_X]),
            y=float(row[_COL_Y]),
            tangent_x=float(row[_COL_TANGENT_X]),
            tangent_y=float(row[_COL_TANGENT_Y]),
            segment_dist=float(row[_COL_SEGMENT_DIST]),
            cumulative_dist=float(row[_COL_CUMULATIVE_DIST]),
            angle=float(row[_COL_ANGLE]),
        )

    def __iter__(self) -> Iterator[CurveSample]:
        for index in range(len(self)):
            yield self[index]

    @property
    def data(self) -> NDArray[np.float64]:
        """The read-only sample array of shape (n, 8)."""
        return self._data

    @property
    def last_index(self) -> int:
        """Index of the last sample."""
        return len(self) - 1

    @property
    def total_length(self) -> float:
        """Approximate arc length of the curve, i.e. cumulative_dist of the last sample."""
        return float(self._data[-1, _COL_CUMULATIVE_DIST])

    @property
    def ts(self) -> NDArray[np.float64]:
        """Curve parameters of all samples."""
        return self._data[:, _COL_T]

    @property
    def xs(self) -> NDArray[np.float64]:
        """x-coordinates of all samples."""
        return self._data[:, _COL_X]

    @property
    def ys(self) -> NDArray[np.float64]:
        """y-coordinates of all samples."""
        return self._data[:, _COL_Y]

    @property
    def segment_dists(self) -> NDArray[np.float64]:
        """Distances to the previous sample."""
        return self._data[:, _COL_SEGMENT_DIST]

    @property
    def cumulative_dists(self) -> NDArray[np.float64]:
        """Running arc length at each sample."""
        return self._data[:, _COL_CUMULATIVE_DIST]

    @property
    def angles(self) -> NDArray[np.float64]:
        """Rotation angles (radians) of all samples."""
        return self._data[:, _COL_ANGLE]


###############################################################################
# CurveSampler
###############################################################################


class CurveSampler:
    """
    Discretizes a cubic Bezier curve into a SampleTable.

    Algorithm:
        1. Evaluate the curve at t = i / sample_count for i = 0 .. sample_count,
           i.e. sample_count intervals and sample_count + 1 samples.
        2. segment_dist[i] = Euclidean distance between sample i-1 and sample i,
           segment_dist[0] = 0.
        3. cumulative_dist = running sum of segment_dist.
        4. angle from each sample's own tangent according to angle_mode.
           A zero tangent gives angle 0.
    """

    def __init__(self, sample_count: int = DEFAULT_SAMPLE_COUNT, angle_mode: AngleMode = DEFAULT_ANGLE_MODE) -> None:
        if isinstance(sample_count, bool) or not isinstance(sample_count, (int, np.integer)) or sample_count <= 0:
            raise InvalidConfigurationError(f"Sample count must be a positive integer, got {sample_count!r}")
        self._sample_count = int(sample_count)
        self._angle_mode = angle_mode

    @property
    def sample_count(self) -> int:
        """Number of intervals the curve is divided into."""
        return self._sample_count

    @property
    def angle_mode(self) -> AngleMode:
        """How the sample angle is derived from the tangent."""
        return self._angle_mode

    @staticmethod
    def tangent_angles(
        tangent_x: NDArray[np.float64], tangent_y: NDArray[np.float64], angle_mode: AngleMode
    ) -> NDArray[np.float64]:
        """Rotation angles in radians for the given tangents."""
        if angle_mode == AngleMode.ATAN:
            with np.errstate(divide="ignore", invalid="ignore"):
                angles = np.arctan(tangent_y / tangent_x)
        else:
            angles = np.arctan2(tangent_y, tangent_x)
        zero_tangent = (tangent_x == 0.0) & (tangent_y == 0.0)
        angles[zero_tangent] = 0.0
        return angles

    def sample(self, curve: CubicCurve) -> SampleTable:
        """
        Sample the given curve.

        Raises:
            InvalidConfigurationError: If the curve contains non-finite coordinates.
        """
        curve.validate()

        t = np.arange(self._sample_count + 1, dtype=np.float64) / self._sample_count
        evaluated = BezierCurve.evaluate_numpy(t, curve)

        data = np.empty((len(t), _NUM_COLS), dtype=np.float64)
        data[:, _COL_T] = t
        data[:, _COL_X : _COL_TANGENT_Y + 1] = evaluated

        data[0, _COL_SEGMENT_DIST] = 0.0
        data[1:, _COL_SEGMENT_DIST] = np.hypot(np.diff(evaluated[:, 0]), np.diff(evaluated[:, 1]))
        data[:, _COL_CUMULATIVE_DIST] = np.cumsum(data[:, _COL_SEGMENT_DIST])
        data[:, _COL_ANGLE] = self.tangent_angles(evaluated[:, 2], evaluated[:, 3], self._angle_mode)

        table = SampleTable(data)
        if table.total_length == 0.0:
            logger.warning("Curve has zero length, all samples coincide: %s", curve)
        logger.debug("Sampled curve with %d samples, length %.3f", len(table), table.total_length)
        return table


def sample_curve(
    curve: CubicCurve, sample_count: int = DEFAULT_SAMPLE_COUNT, angle_mode: AngleMode = DEFAULT_ANGLE_MODE
) -> SampleTable:
    """Sample _curve_ into sample_count intervals (sample_count + 1 samples)."""
    return CurveSampler(sample_count, angle_mode).sample(curve)
