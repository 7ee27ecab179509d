"""
Per-channel histogram equalization.

For each channel a 256-bucket histogram is accumulated, turned into a
cumulative distribution, and mapped through

    map[i] = round_half_up((cdf[i] - cdf_min) * 255 / (total - 1))

computed in float64 on the exact integer numerator. cdf_min is the
smallest non-zero cumulative count, i.e. the count of the darkest level
present, so that level always maps to 0.
"""

from dataclasses import dataclass

import numpy as np

from rasterops.core.buffer import RasterBuffer
from rasterops.core.errors import DegenerateInput

LEVELS = 256
CHANNELS = ("red", "green", "blue")


def channel_histogram(values: np.ndarray) -> np.ndarray:
    """Frequency of each level 0-255 in a uint8 array."""
    return np.bincount(values.ravel(), minlength=LEVELS).astype(np.int64)


def cumulative(hist: np.ndarray) -> np.ndarray:
    """Running sum, ``cdf[0] = hist[0]``."""
    return np.cumsum(hist, dtype=np.int64)


def remap_table(cdf: np.ndarray, total: int) -> np.ndarray:
    """
    Build the 256-entry equalization table for one channel.

    Args:
        cdf: Cumulative distribution of the channel
        total: Number of pixels in the image

    Raises:
        DegenerateInput: If total is 1 (the divisor would be zero)
    """
    if total <= 1:
        raise DegenerateInput(f"Cannot equalize an image of {total} pixel(s)")
    nonzero = cdf[cdf > 0]
    cdf_min = nonzero.min() if nonzero.size else 0
    scaled = (cdf - cdf_min) * 255 / (total - 1)
    return np.clip(np.floor(scaled + 0.5), 0, 255).astype(np.uint8)


@dataclass
class EqualizationTables:
    """Histogram, CDF and remap table for each channel, stacked as (3, 256)."""
    hist: np.ndarray
    cdf: np.ndarray
    mapping: np.ndarray
    total: int

    def channel(self, name: str) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return (hist, cdf, mapping) for "red", "green" or "blue"."""
        if name not in CHANNELS:
            raise ValueError(f"Unknown channel: {name}. Available: {list(CHANNELS)}")
        i = CHANNELS.index(name)
        return self.hist[i], self.cdf[i], self.mapping[i]


def build_tables(source: RasterBuffer) -> EqualizationTables:
    """Accumulate histograms and build the remap tables for every channel."""
    pixels = source.pixels
    width, height = source.size
    total = width * height

    hist = np.stack([channel_histogram(pixels[:, :, c]) for c in range(3)])
    cdf = np.stack([cumulative(h) for h in hist])
    mapping = np.stack([remap_table(c, total) for c in cdf])
    return EqualizationTables(hist=hist, cdf=cdf, mapping=mapping, total=total)


def apply_tables(source: RasterBuffer, tables: EqualizationTables) -> RasterBuffer:
    """Map every channel value through its remap table."""
    pixels = source.pixels
    out = np.empty_like(pixels)
    for c in range(3):
        out[:, :, c] = tables.mapping[c][pixels[:, :, c]]
    return RasterBuffer.from_array(out, copy=False)


def equalize(source: RasterBuffer) -> RasterBuffer:
    """
    Contrast-normalize each channel independently.

    Raises:
        DegenerateInput: For a single-pixel image
    """
    return apply_tables(source, build_tables(source))
