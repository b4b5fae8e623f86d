"""Shared fixtures for facecam tests.

Everything is synthetic: no camera, window or model graph is needed.
"""

import numpy as np
import pytest

from facecam.decode import RawOutputPair
from facecam.errors import FrameSourceError
from facecam.frame import PixelFrame


class StubDetector:
    """Returns the same outputs for every frame and records what it was fed."""

    def __init__(self, coordinates=(), scores=(), errors=()):
        self.outputs = RawOutputPair.from_arrays(coordinates, scores)
        self.errors = list(errors)
        self.calls = []

    def detect(self, tensor, params):
        self.calls.append((tensor.copy(), params))
        if self.errors:
            error = self.errors.pop(0)
            if error is not None:
                raise error
        return self.outputs


class FakeCamera:
    """Hands out queued frames; a queued exception is raised instead."""

    def __init__(self, frames):
        self._frames = list(frames)

    def next_frame(self):
        if not self._frames:
            raise KeyboardInterrupt
        item = self._frames.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class FakeDisplay:
    def __init__(self):
        self.presented = []

    def present(self, frame_id, image):
        self.presented.append((frame_id, image.as_array().copy()))


@pytest.fixture
def black_frame():
    return PixelFrame.blank(4, 4)


@pytest.fixture
def random_frame():
    rng = np.random.default_rng(42)
    return PixelFrame(rng.integers(0, 256, size=(6, 9, 3), dtype=np.uint8))


@pytest.fixture
def stub_detector():
    return StubDetector


@pytest.fixture
def fake_camera():
    return FakeCamera


@pytest.fixture
def fake_display():
    return FakeDisplay()


@pytest.fixture
def camera_error():
    return FrameSourceError("no frame")
