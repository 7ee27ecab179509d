"""
Compose module - Blending, keying and geometric remapping.
"""

from rasterops.compose.blend import cross_fade, cross_fade_sequence
from rasterops.compose.chroma import KeyPredicate, green_screen, key_mask, chroma_key_composite
from rasterops.compose.warp import OutOfRange, PiecewiseLinearMap, piecewise_warp

__all__ = [
    "cross_fade",
    "cross_fade_sequence",
    "KeyPredicate",
    "green_screen",
    "key_mask",
    "chroma_key_composite",
    "OutOfRange",
    "PiecewiseLinearMap",
    "piecewise_warp",
]
