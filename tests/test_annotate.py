"""Tests for drawing boxes onto frames."""

import math

import numpy as np
import pytest

from facecam.annotate import clamp_box, draw_boxes
from facecam.decode import BBox
from facecam.frame import PixelFrame

GREEN = (0, 255, 0)


def _box(x1, y1, x2, y2, prob=0.99):
    return BBox(y1=y1, x1=x1, y2=y2, x2=x2, prob=prob)


class TestClampBox:
    def test_inside_frame(self):
        assert clamp_box(_box(1, 2, 3, 5), 10, 10) == (1, 2, 3, 5)

    def test_rounds_origin_and_size(self):
        assert clamp_box(_box(0.6, 1.4, 2.6, 3.4), 10, 10) == (1, 1, 3, 3)

    def test_clips_left_edge(self):
        assert clamp_box(_box(-5, 0, 10, 10), 8, 20) == (0, 0, 8, 10)

    def test_clips_bottom_right(self):
        assert clamp_box(_box(5, 5, 50, 50), 8, 6) == (5, 5, 8, 6)

    def test_inverted_box_is_skipped(self):
        assert clamp_box(_box(5, 5, 2, 9), 10, 10) is None

    def test_fully_outside_is_skipped(self):
        assert clamp_box(_box(20, 20, 30, 30), 10, 10) is None
        assert clamp_box(_box(-30, 0, -20, 5), 10, 10) is None


class TestDrawBoxes:
    def test_empty_sequence_leaves_frame_unchanged(self):
        rng = np.random.default_rng(0)
        frame = PixelFrame(rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8))
        before = frame.pixels.copy()
        assert draw_boxes(frame, [], GREEN) == 0
        assert np.array_equal(frame.pixels, before)

    def test_filled_rectangle(self, black_frame):
        assert draw_boxes(black_frame, [_box(0, 0, 2, 2)], GREEN) == 1
        assert (black_frame.pixels[:2, :2] == GREEN).all()
        mask = np.zeros((4, 4), dtype=bool)
        mask[:2, :2] = True
        assert not black_frame.pixels[~mask].any()

    def test_clipped_box_stays_in_bounds(self):
        frame = PixelFrame.blank(8, 12)
        draw_boxes(frame, [_box(-5, 0, 10, 10)], GREEN)
        assert (frame.pixels[:10, :8] == GREEN).all()
        assert not frame.pixels[10:].any()

    def test_outline_leaves_interior(self):
        frame = PixelFrame.blank(6, 6)
        draw_boxes(frame, [_box(1, 1, 5, 5)], GREEN, filled=False)
        assert (frame.pixels[1, 1:5] == GREEN).all()
        assert (frame.pixels[4, 1:5] == GREEN).all()
        assert (frame.pixels[1:5, 1] == GREEN).all()
        assert (frame.pixels[1:5, 4] == GREEN).all()
        assert not frame.pixels[2:4, 2:4].any()
        assert not frame.pixels[0].any()
        assert not frame.pixels[5].any()

    def test_skips_degenerate_boxes(self, black_frame):
        drawn = draw_boxes(black_frame, [_box(3, 3, 1, 1), _box(10, 10, 12, 12)], GREEN)
        assert drawn == 0
        assert not black_frame.pixels.any()

    def test_later_boxes_overwrite_earlier(self, black_frame):
        red = (255, 0, 0)
        draw_boxes(black_frame, [_box(0, 0, 4, 4)], GREEN)
        draw_boxes(black_frame, [_box(1, 1, 2, 2)], red)
        assert black_frame.pixels[1, 1].tolist() == list(red)
        assert black_frame.pixels[0, 0].tolist() == list(GREEN)


@pytest.mark.parametrize(
    "x1, y1, x2, y2",
    [
        (math.nan, 0, 2, 2),
        (0, 0, math.inf, 2),
        (0, -math.inf, 2, 2),
        (0, 0, 2, math.nan),
        (-1e308, 0, 1e308, 2),
    ],
)
def test_non_finite_boxes_are_skipped(x1, y1, x2, y2):
    frame = PixelFrame.blank(4, 4)
    assert clamp_box(_box(x1, y1, x2, y2), 4, 4) is None
    assert draw_boxes(frame, [_box(x1, y1, x2, y2), _box(0, 0, 2, 2)], GREEN) == 1
    assert (frame.pixels[:2, :2] == GREEN).all()
    assert not frame.pixels[2:].any()
