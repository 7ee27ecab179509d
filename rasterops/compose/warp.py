"""
Horizontal piecewise-linear warp.

Each destination column x samples source column ``f(x)`` where f is a
piecewise-linear map. Arithmetic is exact (fractions), then truncated.
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from numbers import Rational

import numpy as np

from rasterops.core.buffer import RasterBuffer
from rasterops.core.errors import OutOfBounds


class OutOfRange(Enum):
    """Handling of remapped coordinates that fall outside the source."""
    CLAMP = "clamp"  # Use the nearest valid column
    FAIL = "fail"    # Raise OutOfBounds


def _exact(value) -> Fraction:
    if isinstance(value, (Rational, float)):
        return Fraction(value)
    return Fraction(str(value))


@dataclass(frozen=True)
class PiecewiseLinearMap:
    """
    Piecewise-linear coordinate map.

    Segment k covers ``starts[k] <= x < starts[k + 1]`` where
    ``starts = (0, *breakpoints)``, and maps x to
    ``intercepts[k] + slopes[k] * (x - starts[k])``, truncated toward zero.

    The defaults stretch columns 0-99 by 2, compress 100-399 by 3 and pass
    400 onward through shifted by -100.

    A breakpoint belongs to the segment it starts, so x = 100 maps to 200.
    This differs from the branch chain `x < 100`, `100 < x < 400`, else
    `x - 400`, where x = 100 fell through to the last branch and gave
    column 0.

    Example:
        >>> m = PiecewiseLinearMap()
        >>> [m(x) for x in (50, 100, 250, 400, 500)]
        [100, 200, 250, 300, 400]
    """
    breakpoints: tuple[int, ...] = (100, 400)
    slopes: tuple = (2, Fraction(1, 3), 1)
    intercepts: tuple = (0, 200, 300)
    _starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.slopes) != len(self.breakpoints) + 1:
            raise ValueError(
                f"{len(self.breakpoints)} breakpoints need {len(self.breakpoints) + 1} "
                f"slopes, got {len(self.slopes)}"
            )
        if len(self.intercepts) != len(self.slopes):
            raise ValueError("Need one intercept per segment")
        if list(self.breakpoints) != sorted(self.breakpoints):
            raise ValueError(f"Breakpoints must be ascending, got {self.breakpoints}")
        object.__setattr__(self, "_starts", (0, *self.breakpoints))

    def segment(self, x: int) -> int:
        """Index of the segment containing x."""
        return bisect_right(self.breakpoints, x)

    def __call__(self, x: int) -> int:
        k = self.segment(x)
        value = _exact(self.intercepts[k]) + _exact(self.slopes[k]) * (x - self._starts[k])
        return int(value)  # int() truncates toward zero

    def columns(self, count: int) -> np.ndarray:
        """Mapped coordinate for every x in range(count)."""
        return np.array([self(x) for x in range(count)], dtype=np.int64)


def piecewise_warp(
    source: RasterBuffer,
    mapping: PiecewiseLinearMap | None = None,
    out_of_range: OutOfRange = OutOfRange.CLAMP,
    row_mapping: PiecewiseLinearMap | None = None,
) -> RasterBuffer:
    """
    Produce a same-sized buffer with ``dest(x, y) = source(f(x), y)``.

    Args:
        source: Input buffer (read-only)
        mapping: Column map; defaults to PiecewiseLinearMap()
        out_of_range: CLAMP to the nearest valid coordinate, or FAIL
        row_mapping: Optional map applied to y as well (identity by default)

    Raises:
        OutOfBounds: With OutOfRange.FAIL when a mapped coordinate is invalid
    """
    mapping = mapping or PiecewiseLinearMap()
    width, height = source.size

    cols = mapping.columns(width)
    rows = row_mapping.columns(height) if row_mapping else np.arange(height)

    if out_of_range is OutOfRange.FAIL:
        bad_cols = np.flatnonzero((cols < 0) | (cols >= width))
        if bad_cols.size:
            raise OutOfBounds(int(cols[bad_cols[0]]), 0, width, height)
        bad_rows = np.flatnonzero((rows < 0) | (rows >= height))
        if bad_rows.size:
            raise OutOfBounds(0, int(rows[bad_rows[0]]), width, height)
    else:
        cols = np.clip(cols, 0, width - 1)
        rows = np.clip(rows, 0, height - 1)

    warped = source.pixels[rows[:, np.newaxis], cols[np.newaxis, :]]
    return RasterBuffer.from_array(warped, copy=False)
