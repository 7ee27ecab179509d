"""
Filters module - Single-input pixel operators.

This module provides:
- Order-statistic (median) despeckle
- 3x3 convolution (smooth / sharpen) with clamping policies
- Grayscale reduction and Sobel edge detection
- Per-channel histogram equalization
"""

from rasterops.filters.order import order_statistic, median_despeckle
from rasterops.filters.convolution import (
    ClampPolicy,
    kernel_response,
    convolve,
    smooth,
    sharpen,
)
from rasterops.filters.edges import grayscale, gradient_magnitude, detect_edges
from rasterops.filters.histogram import (
    EqualizationTables,
    channel_histogram,
    cumulative,
    remap_table,
    build_tables,
    apply_tables,
    equalize,
)

__all__ = [
    # Order statistics
    "order_statistic",
    "median_despeckle",
    # Convolution
    "ClampPolicy",
    "kernel_response",
    "convolve",
    "smooth",
    "sharpen",
    # Edges
    "grayscale",
    "gradient_magnitude",
    "detect_edges",
    # Histogram
    "EqualizationTables",
    "channel_histogram",
    "cumulative",
    "remap_table",
    "build_tables",
    "apply_tables",
    "equalize",
]
