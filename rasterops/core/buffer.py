"""
RasterBuffer - the in-memory RGB grid every operator reads and writes.

Pixels are stored as a (height, width, 3) uint8 numpy array, indexed
``[y, x, channel]`` with the origin at the top-left corner. Coordinates
in the public API are always ``(x, y)``.
"""

from typing import Any, NamedTuple, Sequence

import numpy as np

from rasterops.core.errors import DimensionMismatch, InvalidChannelValue, OutOfBounds


class RGB(NamedTuple):
    """An 8-bit RGB triple."""
    red: int
    green: int
    blue: int


def _check_channels(color: Sequence[int] | None) -> RGB:
    if color is None:
        raise InvalidChannelValue("Can't set color to None")
    if len(color) != 3:
        raise InvalidChannelValue(f"Expected 3 channels, got {len(color)}")
    for value in color:
        if not 0 <= int(value) <= 255:
            raise InvalidChannelValue(f"Channel value {value} outside [0, 255]")
    return RGB(int(color[0]), int(color[1]), int(color[2]))


class RasterBuffer:
    """
    A width x height grid of RGB triples.

    Example:
        >>> buf = RasterBuffer(4, 3)
        >>> buf.set(1, 2, (255, 0, 0))
        >>> buf.get(1, 2)
        RGB(red=255, green=0, blue=0)
    """

    def __init__(self, width: int, height: int, fill: Sequence[int] = (0, 0, 0)):
        """
        Allocate a blank buffer.

        Args:
            width: Number of columns (> 0)
            height: Number of rows (> 0)
            fill: Initial color of every pixel (default black)
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer size must be positive, got {width}x{height}")
        color = _check_channels(fill)
        self._pixels = np.empty((height, width, 3), dtype=np.uint8)
        self._pixels[:, :] = color

    @classmethod
    def from_array(cls, array: np.ndarray, copy: bool = True) -> "RasterBuffer":
        """
        Build a buffer from a (height, width, 3) array.

        Args:
            array: Pixel data, any integer or float dtype with values in [0, 255]
            copy: If False and the array is already uint8, share its memory

        Raises:
            ValueError: If the array does not have shape (H, W, 3)
            InvalidChannelValue: If any value lies outside [0, 255]
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 3 or 0 in array.shape:
            raise ValueError(f"Expected a non-empty (H, W, 3) array, got shape {array.shape}")

        if array.dtype != np.uint8:
            if array.min() < 0 or array.max() > 255:
                raise InvalidChannelValue(
                    f"Channel values span [{array.min()}, {array.max()}], outside [0, 255]"
                )
            array = array.astype(np.uint8)
        elif copy:
            array = array.copy()

        buf = cls.__new__(cls)
        buf._pixels = array
        return buf

    @classmethod
    def from_source(cls, source: Any) -> "RasterBuffer":
        """
        Populate a buffer from an image-source collaborator.

        The source must provide ``width()``, ``height()`` and ``get(x, y)``.
        """
        if isinstance(source, RasterBuffer):
            return source.copy()
        width, height = source.width(), source.height()
        buf = cls(width, height)
        for y in range(height):
            for x in range(width):
                buf._pixels[y, x] = _check_channels(source.get(x, y))
        return buf

    # The image-source contract uses methods, so width/height are callables
    def width(self) -> int:
        """Number of columns."""
        return self._pixels.shape[1]

    def height(self) -> int:
        """Number of rows."""
        return self._pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return (self._pixels.shape[1], self._pixels.shape[0])

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the underlying (H, W, 3) array."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._pixels.shape[1] and 0 <= y < self._pixels.shape[0]

    def get(self, x: int, y: int) -> RGB:
        """Return the color at (x, y)."""
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, *self.size)
        r, g, b = self._pixels[y, x]
        return RGB(int(r), int(g), int(b))

    def set(self, x: int, y: int, color: Sequence[int]) -> None:
        """Set the color at (x, y)."""
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, *self.size)
        self._pixels[y, x] = _check_channels(color)

    def blit(
        self,
        x: int,
        y: int,
        patch: np.ndarray,
        mask: np.ndarray | None = None,
    ) -> None:
        """
        Write a (h, w, 3) patch with its top-left corner at (x, y).

        Parts of the patch that fall outside the buffer are skipped.

        Args:
            x: Destination column of the patch's left edge (may be negative)
            y: Destination row of the patch's top edge (may be negative)
            patch: Pixel data with values in [0, 255]
            mask: Optional (h, w) boolean array; only True pixels are written
        """
        patch = np.asarray(patch)
        if patch.dtype != np.uint8:
            if patch.size and (patch.min() < 0 or patch.max() > 255):
                raise InvalidChannelValue("Patch values outside [0, 255]")
            patch = patch.astype(np.uint8)

        h, w = patch.shape[:2]
        width, height = self.size
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, width), min(y + h, height)
        if x0 >= x1 or y0 >= y1:
            return

        src = patch[y0 - y:y1 - y, x0 - x:x1 - x]
        dst = self._pixels[y0:y1, x0:x1]
        if mask is None:
            dst[:] = src
        else:
            keep = np.asarray(mask, dtype=bool)[y0 - y:y1 - y, x0 - x:x1 - x]
            dst[keep] = src[keep]

    def copy(self) -> "RasterBuffer":
        """Return an independent copy."""
        return RasterBuffer.from_array(self._pixels, copy=True)

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the pixel array."""
        return self._pixels.copy()

    def color_array(self) -> list[list[RGB]]:
        """Return pixels as rows of RGB triples, ``result[y][x]``."""
        return [
            [RGB(int(r), int(g), int(b)) for r, g, b in row]
            for row in self._pixels
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        return f"RasterBuffer({self.width()}x{self.height()})"


def same_size(first: RasterBuffer, second: RasterBuffer) -> None:
    """Raise DimensionMismatch unless both buffers have equal width and height."""
    if first.size != second.size:
        raise DimensionMismatch(first.size, second.size)
