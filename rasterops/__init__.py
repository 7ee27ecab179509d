"""
rasterops - Deterministic RGB raster operators
==============================================

Pixel-level image transformations over in-memory RGB buffers.

Main modules:
- rasterops.core: RasterBuffer, Kernel, errors, collaborator protocols, config
- rasterops.filters: Despeckle, convolution, edges, histogram equalization
- rasterops.compose: Cross-fade, chroma-key compositing, piecewise warp
- rasterops.operations: Named operation registry

File decoding/encoding and display are left to the caller: anything with
``width()``, ``height()`` and ``get(x, y)`` can feed RasterBuffer.from_source().

Quick start:
    >>> from rasterops import RasterBuffer, detect_edges
    >>> buf = RasterBuffer.from_array(frame)
    >>> edges = detect_edges(buf, threshold=150)
"""

__version__ = "0.1.0"

# Convenience imports
from rasterops.core import (
    RGB,
    RasterBuffer,
    Kernel,
    RasterError,
    DimensionMismatch,
    OutOfBounds,
    DegenerateInput,
    InvalidChannelValue,
    FilterChain,
)
from rasterops.filters import (
    ClampPolicy,
    median_despeckle,
    convolve,
    smooth,
    sharpen,
    grayscale,
    detect_edges,
    equalize,
)
from rasterops.compose import (
    cross_fade,
    cross_fade_sequence,
    chroma_key_composite,
    green_screen,
    PiecewiseLinearMap,
    OutOfRange,
    piecewise_warp,
)
from rasterops.operations import apply_operation, get_operations, NamedOperation

__all__ = [
    "__version__",
    "RGB",
    "RasterBuffer",
    "Kernel",
    "RasterError",
    "DimensionMismatch",
    "OutOfBounds",
    "DegenerateInput",
    "InvalidChannelValue",
    "FilterChain",
    "ClampPolicy",
    "median_despeckle",
    "convolve",
    "smooth",
    "sharpen",
    "grayscale",
    "detect_edges",
    "equalize",
    "cross_fade",
    "cross_fade_sequence",
    "chroma_key_composite",
    "green_screen",
    "PiecewiseLinearMap",
    "OutOfRange",
    "piecewise_warp",
    "apply_operation",
    "get_operations",
    "NamedOperation",
]
