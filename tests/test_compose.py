"""
Tests for two-input and geometric operators: cross-fade, chroma-key, warp.
"""

from fractions import Fraction

import pytest
import numpy as np

from rasterops.core import RasterBuffer, DimensionMismatch, OutOfBounds
from rasterops.compose import (
    OutOfRange,
    PiecewiseLinearMap,
    chroma_key_composite,
    cross_fade,
    cross_fade_sequence,
    green_screen,
    key_mask,
    piecewise_warp,
)


def random_buffer(width: int, height: int, seed: int = 0) -> RasterBuffer:
    rng = np.random.default_rng(seed)
    return RasterBuffer.from_array(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def column_ramp(width: int, height: int = 1) -> RasterBuffer:
    """Buffer whose red channel holds the column index."""
    array = np.zeros((height, width, 3), dtype=np.uint8)
    array[:, :, 0] = np.arange(width, dtype=np.uint8)
    array[:, :, 1] = np.arange(height, dtype=np.uint8)[:, np.newaxis]
    return RasterBuffer.from_array(array)


class TestCrossFade:
    """Tests for cross-fade blending."""

    def test_endpoints(self):
        """Test alpha 0 reproduces the second buffer and alpha 1 the first."""
        a = random_buffer(5, 4, seed=1)
        b = random_buffer(5, 4, seed=2)

        assert cross_fade(a, b, 0.0) == b
        assert cross_fade(a, b, 1.0) == a

    def test_rounds_half_up(self):
        """Test midpoint blends round half up."""
        a = RasterBuffer(1, 1, fill=(255, 0, 1))
        b = RasterBuffer(1, 1, fill=(0, 0, 0))
        assert cross_fade(a, b, 0.5).get(0, 0) == (128, 0, 1)

    def test_dimension_mismatch(self):
        """Test buffers of different width are rejected."""
        with pytest.raises(DimensionMismatch):
            cross_fade(RasterBuffer(3, 2), RasterBuffer(4, 2), 0.5)

    def test_alpha_range(self):
        """Test alpha outside [0, 1] is rejected."""
        with pytest.raises(ValueError):
            cross_fade(RasterBuffer(1, 1), RasterBuffer(1, 1), 1.5)

    def test_sequence(self):
        """Test the animation sequence runs from second to first."""
        a = RasterBuffer(2, 2, fill=(200, 200, 200))
        b = RasterBuffer(2, 2, fill=(0, 100, 0))

        frames = list(cross_fade_sequence(a, b, 4))

        assert len(frames) == 5
        assert frames[0] == b
        assert frames[-1] == a
        assert frames[2].get(1, 1) == (100, 150, 100)

    def test_sequence_needs_frames(self):
        """Test zero frames is rejected."""
        with pytest.raises(ValueError):
            list(cross_fade_sequence(RasterBuffer(1, 1), RasterBuffer(1, 1), 0))


class TestChromaKey:
    """Tests for chroma-key compositing."""

    def test_green_pixels_skipped(self):
        """Test only non-green overlay pixels land on the base."""
        base = RasterBuffer(2, 2, fill=(50, 50, 50))
        overlay = RasterBuffer(2, 2, fill=(0, 255, 0))
        overlay.set(0, 0, (10, 200, 10))
        overlay.set(1, 1, (10, 20, 30))

        result = chroma_key_composite(base, overlay)

        assert result is base
        assert base.get(1, 1) == (10, 20, 30)
        assert base.get(0, 0) == (50, 50, 50)
        assert base.get(1, 0) == (50, 50, 50)
        assert base.get(0, 1) == (50, 50, 50)

    def test_offset_block(self):
        """Test a white overlay at (1, 1) paints a 2x2 block."""
        base = RasterBuffer(4, 4)
        overlay = RasterBuffer(2, 2, fill=(255, 255, 255))

        chroma_key_composite(base, overlay, offset=(1, 1))

        for y in range(4):
            for x in range(4):
                expected = (255, 255, 255) if x in (1, 2) and y in (1, 2) else (0, 0, 0)
                assert base.get(x, y) == expected

    def test_partially_outside(self):
        """Test destinations outside the base are skipped per pixel."""
        overlay = RasterBuffer(2, 2, fill=(255, 0, 0))

        base = RasterBuffer(4, 4)
        chroma_key_composite(base, overlay, offset=(3, 3))
        assert base.get(3, 3) == (255, 0, 0)
        assert base.pixels[:, :, 0].sum() == 255

        base = RasterBuffer(4, 4)
        chroma_key_composite(base, overlay, offset=(-1, -1))
        assert base.get(0, 0) == (255, 0, 0)
        assert base.pixels[:, :, 0].sum() == 255

    def test_overlay_untouched(self):
        """Test the overlay is read-only."""
        overlay = random_buffer(3, 3)
        before = overlay.copy()
        chroma_key_composite(RasterBuffer(5, 5), overlay, offset=(1, 1))
        assert overlay == before

    def test_green_screen_no_overflow(self):
        """Test the predicate compares without 8-bit wraparound."""
        overlay = RasterBuffer(3, 1)
        overlay.set(0, 0, (200, 255, 200))  # 255 < 400: kept
        overlay.set(1, 0, (100, 200, 100))  # equal: kept
        overlay.set(2, 0, (100, 201, 100))  # keyed

        assert key_mask(overlay).tolist() == [[False, False, True]]

    def test_custom_predicate(self):
        """Test a caller-supplied keying rule."""
        base = RasterBuffer(2, 1)
        overlay = RasterBuffer(2, 1, fill=(0, 0, 255))
        overlay.set(0, 0, (255, 0, 0))

        def blue_screen(red, green, blue):
            return blue > red + green

        chroma_key_composite(base, overlay, predicate=blue_screen)
        assert base.get(0, 0) == (255, 0, 0)
        assert base.get(1, 0) == (0, 0, 0)

    def test_scalar_predicate(self):
        """Test predicates returning a single flag apply to every pixel."""
        base = RasterBuffer(2, 2)
        chroma_key_composite(base, RasterBuffer(2, 2, fill=(9, 9, 9)), predicate=lambda r, g, b: True)
        assert base == RasterBuffer(2, 2)

    def test_green_screen_function(self):
        """Test the default predicate on arrays."""
        red = np.array([0, 10])
        green = np.array([1, 10])
        blue = np.array([0, 0])
        assert green_screen(red, green, blue).tolist() == [True, False]


class TestPiecewiseLinearMap:
    """Tests for the coordinate map."""

    def test_default_segments(self):
        """Test the default three-segment map."""
        m = PiecewiseLinearMap()
        assert m(0) == 0
        assert m(99) == 198
        assert m(100) == 200
        assert m(103) == 201
        assert m(399) == 299
        assert m(400) == 300
        assert m(511) == 411

    def test_exact_thirds(self):
        """Test multiples of three land exactly on segment two."""
        m = PiecewiseLinearMap()
        assert [m(x) for x in (103, 106, 397)] == [201, 202, 299]

    def test_segment(self):
        """Test breakpoints start the next segment."""
        m = PiecewiseLinearMap()
        assert m.segment(99) == 0
        assert m.segment(100) == 1
        assert m.segment(400) == 2

    def test_validation(self):
        """Test mismatched parameters are rejected."""
        with pytest.raises(ValueError):
            PiecewiseLinearMap(breakpoints=(100,), slopes=(1, 1, 1), intercepts=(0, 0, 0))
        with pytest.raises(ValueError):
            PiecewiseLinearMap(breakpoints=(10, 5), slopes=(1, 1, 1), intercepts=(0, 0, 0))
        with pytest.raises(ValueError):
            PiecewiseLinearMap(breakpoints=(10,), slopes=(1, 1), intercepts=(0,))

    def test_string_slopes(self):
        """Test rational slopes given as strings."""
        m = PiecewiseLinearMap(breakpoints=(), slopes=("1/3",), intercepts=(0,))
        assert m(9) == 3
        assert m.columns(4).tolist() == [0, 0, 0, 1]
        assert PiecewiseLinearMap(breakpoints=(), slopes=(Fraction(1, 2),), intercepts=(1,))(5) == 3


class TestPiecewiseWarp:
    """Tests for the piecewise warp."""

    def test_custom_map(self):
        """Test every destination column samples the mapped source column."""
        source = column_ramp(5, 2)
        mapping = PiecewiseLinearMap(breakpoints=(2,), slopes=(0, 1), intercepts=(3, 0))

        result = piecewise_warp(source, mapping)

        assert result.size == source.size
        assert [result.get(x, 0).red for x in range(5)] == [3, 3, 0, 1, 2]
        assert [result.get(x, 1).green for x in range(5)] == [1] * 5

    def test_clamps_by_default(self):
        """Test columns past the edge use the last valid column."""
        source = column_ramp(10)
        result = piecewise_warp(source)
        assert [result.get(x, 0).red for x in range(10)] == [0, 2, 4, 6, 8, 9, 9, 9, 9, 9]

    def test_breakpoint_column_starts_next_segment(self):
        """Test column 100 samples column 200 rather than column 0."""
        result = piecewise_warp(column_ramp(256))
        assert result.get(99, 0).red == 198
        assert result.get(100, 0).red == 200
        assert result.get(101, 0).red == 200

    def test_fail_policy(self):
        """Test out-of-range columns raise when asked to."""
        with pytest.raises(OutOfBounds):
            piecewise_warp(column_ramp(10), out_of_range=OutOfRange.FAIL)

    def test_row_mapping(self):
        """Test an optional vertical map flips rows."""
        source = column_ramp(3, 4)
        identity = PiecewiseLinearMap(breakpoints=(), slopes=(1,), intercepts=(0,))
        flip = PiecewiseLinearMap(breakpoints=(), slopes=(-1,), intercepts=(3,))

        result = piecewise_warp(source, identity, row_mapping=flip)

        assert [result.get(0, y).green for y in range(4)] == [3, 2, 1, 0]
        assert [result.get(x, 0).red for x in range(3)] == [0, 1, 2]

    def test_source_untouched(self):
        """Test the warp allocates a new buffer."""
        source = random_buffer(6, 3)
        before = source.copy()
        result = piecewise_warp(source)
        assert source == before
        assert result is not source


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
