"""
Registry of named single-input raster operations.

To add a new operation:
1. Create a function with signature: func(buffer: RasterBuffer, **params) -> RasterBuffer
2. Register it with the @register_operation decorator

Operations never modify their input; each returns a new buffer.
Two-input operators (cross_fade, chroma_key_composite) are called directly.
"""

from typing import Any, Callable, Dict

from rasterops.compose.warp import OutOfRange, PiecewiseLinearMap, piecewise_warp
from rasterops.core.buffer import RasterBuffer
from rasterops.core.kernel import Kernel
from rasterops.filters.convolution import ClampPolicy, convolve, smooth as _smooth
from rasterops.filters.edges import DEFAULT_THRESHOLD, detect_edges, grayscale as _grayscale
from rasterops.filters.histogram import equalize as _equalize
from rasterops.filters.order import median_despeckle

# Registry of available operations
_OPERATIONS: Dict[str, Dict[str, Any]] = {}


def register_operation(name: str, description: str = ""):
    """Decorator to register a raster operation."""
    def decorator(func: Callable):
        _OPERATIONS[name] = {
            'func': func,
            'description': description,
        }
        return func
    return decorator


def get_operations() -> list:
    """Return list of available operation names."""
    return list(_OPERATIONS.keys())


def describe_operations() -> dict[str, str]:
    """Map each operation name to its description."""
    return {name: entry['description'] for name, entry in _OPERATIONS.items()}


def get_operation(name: str) -> Callable:
    """Get an operation function by name."""
    if name not in _OPERATIONS:
        raise ValueError(f"Unknown operation: {name}. Available: {get_operations()}")
    return _OPERATIONS[name]['func']


def apply_operation(name: str, buffer: RasterBuffer, **params) -> RasterBuffer:
    """Apply a named operation to a buffer."""
    func = get_operation(name)
    return func(buffer, **params)


class NamedOperation:
    """
    Adapts a registered operation to the RasterFilter protocol.

    Example:
        >>> step = NamedOperation("edges", threshold=120)
        >>> edges = step.apply(buffer)
    """

    def __init__(self, name: str, **params):
        get_operation(name)
        self.name = name
        self.params = params

    def apply(self, buffer: RasterBuffer) -> RasterBuffer:
        return apply_operation(self.name, buffer, **self.params)

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.params.items())
        return f"{self.name}({args})"


# =============================================================================
# Built-in Operations
# =============================================================================

@register_operation("grayscale", "Average the three channels, (r + g + b) // 3")
def grayscale(buffer: RasterBuffer, **params) -> RasterBuffer:
    return _grayscale(buffer)


@register_operation("despeckle", "3x3 median filter on interior pixels")
def despeckle(buffer: RasterBuffer, **params) -> RasterBuffer:
    return median_despeckle(buffer)


@register_operation("smooth", "3x3 box blur (truncated mean)")
def smooth(buffer: RasterBuffer, **params) -> RasterBuffer:
    return _smooth(buffer)


@register_operation("sharpen", "3x3 sharpen, out-of-range results handled by policy")
def sharpen(buffer: RasterBuffer, policy: str | ClampPolicy = "clamp", **params) -> RasterBuffer:
    """
    Sharpen with an optional custom kernel.

    Params:
        policy: "clamp", "drop" or "strict"
        weights / divisor: Override the default sharpen kernel
    """
    kernel = Kernel.sharpen()
    if 'weights' in params:
        kernel = Kernel(params['weights'], params.get('divisor', 1))
    return convolve(buffer, kernel, ClampPolicy(policy))


@register_operation("edges", "Sobel gradient magnitude thresholded to black/white")
def edges(buffer: RasterBuffer, threshold: int = DEFAULT_THRESHOLD, **params) -> RasterBuffer:
    return detect_edges(buffer, threshold=threshold)


@register_operation("equalize", "Per-channel histogram equalization")
def equalize(buffer: RasterBuffer, **params) -> RasterBuffer:
    return _equalize(buffer)


@register_operation("warp", "Horizontal piecewise-linear warp")
def warp(
    buffer: RasterBuffer,
    breakpoints: tuple | None = None,
    slopes: tuple | None = None,
    intercepts: tuple | None = None,
    out_of_range: str | OutOfRange = "clamp",
    **params,
) -> RasterBuffer:
    """
    Params:
        breakpoints / slopes / intercepts: Override PiecewiseLinearMap defaults
        out_of_range: "clamp" or "fail"
    """
    overrides = {
        key: tuple(value)
        for key, value in (
            ('breakpoints', breakpoints),
            ('slopes', slopes),
            ('intercepts', intercepts),
        )
        if value is not None
    }
    mapping = PiecewiseLinearMap(**overrides)
    return piecewise_warp(buffer, mapping, OutOfRange(out_of_range))
