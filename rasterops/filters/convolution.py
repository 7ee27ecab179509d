"""
3x3 convolution filters (smoothing and sharpening).

Fractional weights are scaled to integers over a common denominator, so
sums are exact. They are divided by the kernel divisor with truncation
toward zero, then passed through a ClampPolicy.
"""

from enum import Enum

import numpy as np
from scipy.ndimage import correlate

from rasterops.core.buffer import RasterBuffer, same_size
from rasterops.core.errors import InvalidChannelValue
from rasterops.core.kernel import Kernel


class ClampPolicy(Enum):
    """What to do with channel values that leave [0, 255]."""
    CLAMP = "clamp"      # Clamp each channel to [0, 255]
    DROP = "drop"        # Leave the destination pixel untouched
    STRICT = "strict"    # Raise InvalidChannelValue


def kernel_response(source: RasterBuffer, kernel: Kernel) -> np.ndarray:
    """
    Compute the divided kernel response for every interior pixel.

    Returns:
        float64 array of shape (height - 2, width - 2, 3), already truncated
        toward zero but not yet clamped
    """
    weights, scale = kernel.integer_weights()
    data = source.to_array().astype(np.int64)
    sums = correlate(data, weights[:, :, np.newaxis], mode="nearest")[1:-1, 1:-1]
    numerators = sums * scale.numerator
    quotients = np.abs(numerators) // scale.denominator
    return (np.sign(numerators) * quotients).astype(np.float64)


def convolve(
    source: RasterBuffer,
    kernel: Kernel,
    policy: ClampPolicy = ClampPolicy.CLAMP,
    dest: RasterBuffer | None = None,
) -> RasterBuffer:
    """
    Apply a 3x3 kernel to every interior pixel, per channel.

    Args:
        source: Input buffer (read-only)
        kernel: Weights and divisor
        policy: Out-of-range handling
        dest: Optional pre-seeded output buffer of the same size; defaults
            to a copy of the source so the border passes through

    Returns:
        The destination buffer

    Raises:
        InvalidChannelValue: With ClampPolicy.STRICT when a result leaves [0, 255]
    """
    if dest is None:
        dest = source.copy()
    else:
        same_size(source, dest)

    width, height = source.size
    if width < 3 or height < 3:
        return dest

    values = kernel_response(source, kernel)

    if policy is ClampPolicy.CLAMP:
        dest.blit(1, 1, np.clip(values, 0, 255))
    elif policy is ClampPolicy.DROP:
        # Reference behaviour: 0 counts as out of range too
        keep = np.all((values > 0) & (values < 256), axis=2)
        dest.blit(1, 1, np.clip(values, 0, 255), mask=keep)
    else:
        bad = (values < 0) | (values > 255)
        if bad.any():
            y, x, _ = np.argwhere(bad)[0]
            raise InvalidChannelValue(
                f"Kernel response {values[y, x].tolist()} at ({x + 1}, {y + 1}) "
                "outside [0, 255]"
            )
        dest.blit(1, 1, values)

    return dest


def smooth(source: RasterBuffer, dest: RasterBuffer | None = None) -> RasterBuffer:
    """Box blur: truncated mean of each 3x3 neighbourhood."""
    return convolve(source, Kernel.box(), ClampPolicy.CLAMP, dest)


def sharpen(
    source: RasterBuffer,
    policy: ClampPolicy = ClampPolicy.CLAMP,
    dest: RasterBuffer | None = None,
) -> RasterBuffer:
    """Sharpen with the centre-9 / neighbours -1 kernel."""
    return convolve(source, Kernel.sharpen(), policy, dest)
