"""Tests for frame → tensor encoding."""

import numpy as np
import pytest

from facecam.codec import TensorEncoder, encode_frame
from facecam.frame import PixelFrame


class TestPixelFrame:
    def test_dimensions(self):
        frame = PixelFrame.blank(5, 3)
        assert frame.width == 5
        assert frame.height == 3
        assert frame.pixels.shape == (3, 5, 3)

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            PixelFrame(np.zeros((4, 4), dtype=np.uint8))
        with pytest.raises(ValueError):
            PixelFrame(np.zeros((4, 4, 4), dtype=np.uint8))

    def test_rejects_wrong_dtype(self):
        with pytest.raises(ValueError):
            PixelFrame(np.zeros((4, 4, 3), dtype=np.float32))

    def test_from_bgr_reorders_to_rgb(self):
        bgr = np.array([[[30, 20, 10]]], dtype=np.uint8)
        frame = PixelFrame.from_bgr(bgr)
        assert frame.pixels[0, 0].tolist() == [10, 20, 30]


class TestEncodeFrame:
    def test_shape_and_size(self, random_frame):
        tensor = encode_frame(random_frame)
        assert tensor.shape == (6, 9, 3)
        assert tensor.size == 6 * 9 * 3
        assert tensor.dtype == np.float32

    def test_single_pixel_channel_reorder(self):
        frame = PixelFrame(np.array([[[10, 20, 30]]], dtype=np.uint8))
        tensor = encode_frame(frame)
        assert tensor.ravel().tolist() == [30.0, 20.0, 10.0]

    def test_values_not_scaled(self):
        frame = PixelFrame(np.full((2, 2, 3), 255, dtype=np.uint8))
        assert encode_frame(frame).max() == 255.0

    def test_row_major_order_preserved(self, random_frame):
        tensor = encode_frame(random_frame)
        for r, c in [(0, 0), (2, 7), (5, 8)]:
            red, green, blue = random_frame.pixels[r, c]
            assert tensor[r, c].tolist() == [float(blue), float(green), float(red)]

    def test_out_buffer_fully_overwritten(self, random_frame):
        out = np.full((6, 9, 3), -1.0, dtype=np.float32)
        result = encode_frame(random_frame, out=out)
        assert result is out
        assert (out >= 0).all()

    def test_out_buffer_wrong_shape(self, random_frame):
        with pytest.raises(ValueError):
            encode_frame(random_frame, out=np.empty((1, 1, 3), dtype=np.float32))


class TestTensorEncoder:
    def test_reuses_scratch_buffer(self, random_frame):
        encoder = TensorEncoder()
        first = encoder.encode(random_frame)
        second = encoder.encode(PixelFrame.blank(9, 6))
        assert first is second
        assert not second.any()

    def test_reallocates_on_size_change(self):
        encoder = TensorEncoder()
        big = encoder.encode(PixelFrame(np.full((4, 4, 3), 7, dtype=np.uint8)))
        small = encoder.encode(PixelFrame.blank(2, 2))
        assert small.shape == (2, 2, 3)
        assert not small.any()
        assert big.shape == (4, 4, 3)
