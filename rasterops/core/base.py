"""
Protocols and shared abstractions for the rasterops framework.

Image decoding, encoding and display live outside this package. Those
collaborators only need to satisfy the protocols defined here.
"""

from typing import Protocol, Sequence, runtime_checkable

from rasterops.core.buffer import RasterBuffer


@runtime_checkable
class ImageSource(Protocol):
    """Anything that can supply pixels to build a RasterBuffer."""

    def width(self) -> int:
        ...

    def height(self) -> int:
        ...

    def get(self, x: int, y: int) -> Sequence[int]:
        """Return the (red, green, blue) triple at (x, y)."""
        ...


@runtime_checkable
class ImageSink(Protocol):
    """Accepts a finished buffer for encoding and persistence."""

    def write(self, buffer: RasterBuffer, format_tag: str) -> None:
        """Persist ``buffer`` using a format tag such as "png" or "jpg"."""
        ...


@runtime_checkable
class RasterFilter(Protocol):
    """Protocol for single-input operators that produce a new buffer."""

    def apply(self, buffer: RasterBuffer) -> RasterBuffer:
        """Apply the filter to a buffer."""
        ...


class FilterChain:
    """
    A chain of raster filters that can be applied in sequence.

    Each filter receives the previous filter's output; the input buffer
    is never modified.

    Example:
        chain = FilterChain()
        chain.add(NamedOperation("grayscale"))
        chain.add(NamedOperation("edges", threshold=120))

        edges = chain.apply(buffer)
    """

    def __init__(self, filters: list[RasterFilter] | None = None):
        self.filters = filters or []

    def add(self, filter_: RasterFilter) -> "FilterChain":
        """Add a filter to the chain."""
        self.filters.append(filter_)
        return self

    def apply(self, buffer: RasterBuffer, verbose: bool = False) -> RasterBuffer:
        """
        Apply all filters in sequence.

        Args:
            buffer: Input buffer (left untouched)
            verbose: Print a line per completed step
        """
        result = buffer
        total = len(self.filters)
        for step, f in enumerate(self.filters, start=1):
            result = f.apply(result)
            if verbose:
                print(f"Step {step} of {total} -- {f!r} complete")
        return result

    def __len__(self) -> int:
        return len(self.filters)
