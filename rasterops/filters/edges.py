"""
Grayscale reduction and Sobel-style gradient edge detection.
"""

import numpy as np

from rasterops.core.buffer import RasterBuffer, same_size

DEFAULT_THRESHOLD = 150

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def grayscale(source: RasterBuffer) -> RasterBuffer:
    """
    Replace every pixel with ``(r + g + b) // 3`` on all three channels.

    Returns:
        New buffer; the source is left untouched
    """
    pixels = source.pixels.astype(np.uint16)
    grey = (pixels.sum(axis=2) // 3).astype(np.uint8)
    return RasterBuffer.from_array(np.dstack((grey, grey, grey)), copy=False)


def gradient_magnitude(source: RasterBuffer) -> np.ndarray:
    """
    Integer gradient magnitude of the red channel.

    Only pixels with ``1 <= x < width - 2`` and ``1 <= y < height - 2``
    are evaluated; the result for pixel (x, y) is at ``[y - 1, x - 1]``.

    Returns:
        int64 array of shape (max(height - 3, 0), max(width - 3, 0))
    """
    width, height = source.size
    red = source.pixels[:, :, 0].astype(np.int64)
    rows, cols = max(height - 3, 0), max(width - 3, 0)
    if rows == 0 or cols == 0:
        return np.zeros((rows, cols), dtype=np.int64)

    def r(dx: int, dy: int) -> np.ndarray:
        return red[1 + dy:1 + dy + rows, 1 + dx:1 + dx + cols]

    gx = (r(-1, -1) - r(-1, 1)
          + 2 * r(0, -1) - 2 * r(0, 1)
          + r(1, -1) - r(1, 1))
    gy = (r(-1, -1) + 2 * r(-1, 0) + r(-1, 1)
          - r(1, -1) - 2 * r(1, 0) - r(1, 1))

    return np.floor(np.sqrt(gx * gx + gy * gy)).astype(np.int64)


def detect_edges(
    source: RasterBuffer,
    threshold: int = DEFAULT_THRESHOLD,
    dest: RasterBuffer | None = None,
    grayscale_first: bool = True,
) -> RasterBuffer:
    """
    Binary edge map from thresholded gradient magnitude.

    Evaluated pixels become black when ``G <= threshold`` and white
    otherwise. Pixels outside the evaluated window keep the value they
    have in ``dest``.

    Args:
        source: Input buffer (read-only)
        threshold: Magnitude at or below which a pixel is not an edge
        dest: Optional pre-seeded output buffer; defaults to a copy of the
            grayscaled source
        grayscale_first: Grayscale the source before measuring gradients.
            Pass False when the source is already gray.

    Returns:
        The destination buffer
    """
    gray = grayscale(source) if grayscale_first else source
    if dest is None:
        dest = gray.copy()
    else:
        same_size(source, dest)

    magnitude = gradient_magnitude(gray)
    if magnitude.size == 0:
        return dest

    edges = np.where((magnitude > threshold)[:, :, np.newaxis], WHITE, BLACK)
    dest.blit(1, 1, edges)
    return dest
