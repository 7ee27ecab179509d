"""
3x3 weight matrices for convolution filters.
"""

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Sequence

import numpy as np

from rasterops.core.errors import DegenerateInput

# Float weights are read as the nearest fraction with at most this denominator
MAX_DENOMINATOR = 10**6


def _rational(value) -> Fraction:
    if isinstance(value, float):
        return Fraction(value).limit_denominator(MAX_DENOMINATOR)
    return Fraction(value)


@dataclass(frozen=True)
class Kernel:
    """
    Immutable 3x3 weight matrix with a normalization divisor.

    ``weights[row][col]`` multiplies the neighbour at
    ``(x + col - 1, y + row - 1)``.

    Example:
        >>> Kernel.box().divisor
        9
        >>> Kernel.sharpen().weight_sum
        1
    """
    weights: tuple[tuple[float, ...], ...]
    divisor: float = 1

    def __init__(self, weights: Sequence[Sequence[float]], divisor: float = 1):
        rows = tuple(tuple(row) for row in weights)
        if len(rows) != 3 or any(len(row) != 3 for row in rows):
            raise ValueError("Kernel weights must be a 3x3 matrix")
        if divisor == 0:
            raise DegenerateInput("Kernel divisor must be non-zero")
        object.__setattr__(self, "weights", rows)
        object.__setattr__(self, "divisor", divisor)

    @classmethod
    def box(cls) -> "Kernel":
        """All-ones smoothing kernel, divisor 9."""
        return cls([[1, 1, 1], [1, 1, 1], [1, 1, 1]], divisor=9)

    @classmethod
    def sharpen(cls) -> "Kernel":
        """Centre +9, neighbours -1, divisor 1."""
        return cls([[-1, -1, -1], [-1, 9, -1], [-1, -1, -1]], divisor=1)

    @property
    def weight_sum(self) -> float:
        return sum(sum(row) for row in self.weights)

    @property
    def is_positive(self) -> bool:
        """True when no weight is negative, so results stay in range."""
        return all(w >= 0 for row in self.weights for w in row)

    def as_array(self) -> np.ndarray:
        """Weights as a 3x3 array (int64, or float64 for fractional weights)."""
        if all(isinstance(w, (int, np.integer)) for row in self.weights for w in row):
            return np.array(self.weights, dtype=np.int64)
        return np.array(self.weights, dtype=np.float64)

    def integer_weights(self) -> tuple[np.ndarray, Fraction]:
        """
        Exact integer form of the kernel.

        Returns:
            (weights, scale) where ``weights`` is a 3x3 int64 array and
            ``weights * scale`` equals ``self.weights / self.divisor`` exactly.
            Float weights such as 1/9 or 0.1 are read as 1/9 and 1/10.
        """
        rows = [[_rational(w) for w in row] for row in self.weights]
        common = math.lcm(*(w.denominator for row in rows for w in row))
        weights = np.array([[int(w * common) for w in row] for row in rows], dtype=np.int64)
        return weights, Fraction(1) / (common * _rational(self.divisor))
