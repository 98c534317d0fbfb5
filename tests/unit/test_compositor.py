"""
Unit tests for source-over compositing.
"""
import numpy as np
import pytest

from fweh.buffer import PixelBuffer
from fweh.renderers.compositor import overlay


@pytest.fixture
def canvas():
    return PixelBuffer.new(10, 8, (0, 0, 0, 255))


class TestOverlay:
    def test_opaque_source_replaces_destination(self, canvas):
        overlay(canvas, PixelBuffer.new(3, 2, (9, 99, 199, 255)), 4, 5)
        assert canvas.get_pixel(4, 5) == (9, 99, 199, 255)
        assert canvas.get_pixel(6, 6) == (9, 99, 199, 255)
        assert canvas.get_pixel(7, 5) == (0, 0, 0, 255)
        assert canvas.get_pixel(4, 7) == (0, 0, 0, 255)

    def test_translucent_source_blends(self, canvas):
        overlay(canvas, PixelBuffer.new(2, 2, (255, 255, 255, 128)), 0, 0)
        r, g, b, a = canvas.get_pixel(0, 0)
        assert a == 255
        assert 126 <= r <= 130
        assert r == g == b

    def test_transparent_source_changes_nothing(self, canvas):
        before = canvas.copy()
        overlay(canvas, PixelBuffer.new(4, 4, (255, 255, 255, 0)), 2, 2)
        assert canvas == before

    def test_alpha_accumulates_over_transparent_destination(self):
        dest = PixelBuffer.new(1, 1, (0, 0, 255, 128))
        overlay(dest, PixelBuffer.new(1, 1, (255, 0, 0, 128)), 0, 0)
        r, g, b, a = dest.get_pixel(0, 0)
        # 128 + 128 * (1 - 128/255)
        assert 190 <= a <= 192
        assert r > b

    def test_source_is_not_modified(self, canvas):
        src = PixelBuffer.new(2, 2, (1, 2, 3, 100))
        before = src.copy()
        overlay(canvas, src, 1, 1)
        assert src == before


class TestClipping:
    def test_negative_position_clips_top_left(self, canvas):
        src = PixelBuffer.new(4, 4, (255, 0, 0, 255))
        src.put_pixel(3, 3, (0, 255, 0, 255))
        overlay(canvas, src, -3, -3)
        assert canvas.get_pixel(0, 0) == (0, 255, 0, 255)
        assert canvas.get_pixel(1, 0) == (0, 0, 0, 255)

    def test_overhang_clips_bottom_right(self, canvas):
        overlay(canvas, PixelBuffer.new(5, 5, (255, 0, 0, 255)), 8, 6)
        assert canvas.get_pixel(9, 7) == (255, 0, 0, 255)
        assert canvas.get_pixel(7, 7) == (0, 0, 0, 255)
        assert int((canvas.pixels[:, :, 0] == 255).sum()) == 4

    def test_source_larger_than_destination(self, canvas):
        overlay(canvas, PixelBuffer.new(30, 30, (5, 6, 7, 255)), -10, -10)
        assert (canvas.pixels == [5, 6, 7, 255]).all()

    @pytest.mark.parametrize("x, y", [(10, 0), (0, 8), (-3, 0), (0, -2), (50, 50)])
    def test_fully_outside_is_a_no_op(self, canvas, x, y):
        before = canvas.copy()
        overlay(canvas, PixelBuffer.new(3, 2, (255, 255, 255, 255)), x, y)
        assert np.array_equal(canvas.pixels, before.pixels)
