"""
Order-statistic (median) despeckle filter.
"""

import cv2
from scipy.ndimage import rank_filter

from rasterops.core.buffer import RasterBuffer, same_size

MEDIAN_RANK = 4


def _prepare_dest(source: RasterBuffer, dest: RasterBuffer | None) -> RasterBuffer:
    if dest is None:
        return source.copy()
    same_size(source, dest)
    return dest


def order_statistic(
    source: RasterBuffer,
    rank: int = MEDIAN_RANK,
    dest: RasterBuffer | None = None,
) -> RasterBuffer:
    """
    Replace every interior pixel with the rank-th smallest of its 3x3
    neighbourhood, per channel.

    The 1-pixel border keeps whatever ``dest`` holds (a copy of the source
    by default). Buffers narrower or shorter than 3 pixels have no interior.

    Args:
        source: Input buffer (read-only)
        rank: 0-based index into the 9 sorted neighbourhood values (4 = median)
        dest: Optional pre-seeded output buffer of the same size

    Returns:
        The destination buffer
    """
    if not 0 <= rank <= 8:
        raise ValueError(f"Rank must be in [0, 8], got {rank}")
    dest = _prepare_dest(source, dest)
    width, height = source.size
    if width < 3 or height < 3:
        return dest

    pixels = source.to_array()
    if rank == MEDIAN_RANK:
        filtered = cv2.medianBlur(pixels, 3)
    else:
        filtered = rank_filter(pixels, rank=rank, size=(3, 3, 1), mode="nearest")

    dest.blit(1, 1, filtered[1:-1, 1:-1])
    return dest


def median_despeckle(
    source: RasterBuffer,
    dest: RasterBuffer | None = None,
) -> RasterBuffer:
    """3x3 median filter over interior pixels; see order_statistic()."""
    return order_statistic(source, MEDIAN_RANK, dest)
