"""
Cross-fade blending of two equally sized buffers.
"""

from typing import Iterator

import numpy as np

from rasterops.core.buffer import RasterBuffer, same_size


def cross_fade(first: RasterBuffer, second: RasterBuffer, alpha: float) -> RasterBuffer:
    """
    Linear interpolation ``alpha * first + (1 - alpha) * second``.

    Each channel is rounded half up and clamped to [0, 255].

    Args:
        first: Buffer weighted by alpha
        second: Buffer weighted by 1 - alpha
        alpha: Blend weight in [0, 1]

    Raises:
        DimensionMismatch: If the buffers differ in width or height
        ValueError: If alpha lies outside [0, 1]
    """
    same_size(first, second)
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"Alpha must be in [0, 1], got {alpha}")

    a = first.pixels.astype(np.float64)
    b = second.pixels.astype(np.float64)
    mixed = np.floor(alpha * a + (1.0 - alpha) * b + 0.5)
    return RasterBuffer.from_array(np.clip(mixed, 0, 255).astype(np.uint8), copy=False)


def cross_fade_sequence(
    first: RasterBuffer,
    second: RasterBuffer,
    frames: int,
) -> Iterator[RasterBuffer]:
    """
    Yield ``frames + 1`` blends with alpha stepping from 0 to 1.

    Frame k uses ``alpha = k / frames``, so the sequence starts at
    ``second`` and ends at ``first``. Timing and display are up to the caller.
    """
    if frames < 1:
        raise ValueError(f"Need at least 1 frame, got {frames}")
    same_size(first, second)
    for k in range(frames + 1):
        yield cross_fade(first, second, k / frames)
