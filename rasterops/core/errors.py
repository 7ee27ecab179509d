"""
Error kinds raised by raster operators.

Every error derives from RasterError and from the builtin exception that
best describes it, so callers may catch either.
"""


class RasterError(Exception):
    """Base class for all rasterops errors."""


class DimensionMismatch(RasterError, ValueError):
    """Operator was given buffers of incompatible size."""

    def __init__(self, first: tuple[int, int], second: tuple[int, int]):
        self.first = first
        self.second = second
        super().__init__(
            f"Buffer sizes differ: {first[0]}x{first[1]} vs {second[0]}x{second[1]}"
        )


class OutOfBounds(RasterError, IndexError):
    """Coordinate access outside the buffer extent."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        super().__init__(
            f"Coordinate ({x}, {y}) outside {width}x{height} buffer"
        )


class DegenerateInput(RasterError, ValueError):
    """Input for which the operation is undefined."""


class InvalidChannelValue(RasterError, ValueError):
    """A channel value outside [0, 255]."""
