"""
Chroma-key compositing of an overlay onto a base buffer.
"""

from typing import Callable

import numpy as np

from rasterops.core.buffer import RasterBuffer

# Called with int32 channel arrays of the overlay; True marks keyed-out pixels
KeyPredicate = Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray]


def green_screen(red: np.ndarray, green: np.ndarray, blue: np.ndarray) -> np.ndarray:
    """Key out pixels whose green exceeds red + blue."""
    return green > red + blue


def key_mask(overlay: RasterBuffer, predicate: KeyPredicate = green_screen) -> np.ndarray:
    """Boolean (height, width) array, True where the overlay pixel is keyed out."""
    pixels = overlay.pixels.astype(np.int32)
    keyed = predicate(pixels[:, :, 0], pixels[:, :, 1], pixels[:, :, 2])
    return np.broadcast_to(np.asarray(keyed, dtype=bool), pixels.shape[:2])


def chroma_key_composite(
    base: RasterBuffer,
    overlay: RasterBuffer,
    offset: tuple[int, int] = (0, 0),
    predicate: KeyPredicate = green_screen,
) -> RasterBuffer:
    """
    Copy overlay pixels onto ``base`` in place, skipping keyed-out pixels.

    Overlay pixel (i, j) lands on base pixel (i + dx, j + dy). Destinations
    outside the base are skipped individually.

    Args:
        base: Buffer to modify
        overlay: Source of the copied pixels (read-only)
        offset: (dx, dy) position of the overlay's top-left corner
        predicate: Keying rule; defaults to green_screen

    Returns:
        The mutated base buffer
    """
    dx, dy = offset
    keep = ~key_mask(overlay, predicate)
    base.blit(dx, dy, overlay.pixels, mask=keep)
    return base
