"""
Core module - Raster buffer, kernels, errors and shared abstractions.
"""

from rasterops.core.buffer import RGB, RasterBuffer, same_size
from rasterops.core.kernel import Kernel
from rasterops.core.errors import (
    RasterError,
    DimensionMismatch,
    OutOfBounds,
    DegenerateInput,
    InvalidChannelValue,
)
from rasterops.core.base import ImageSource, ImageSink, RasterFilter, FilterChain
from rasterops.core.config import OperatorConfig, load_config, save_config

__all__ = [
    "RGB",
    "RasterBuffer",
    "same_size",
    "Kernel",
    "RasterError",
    "DimensionMismatch",
    "OutOfBounds",
    "DegenerateInput",
    "InvalidChannelValue",
    "ImageSource",
    "ImageSink",
    "RasterFilter",
    "FilterChain",
    "OperatorConfig",
    "load_config",
    "save_config",
]
