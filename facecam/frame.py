"""
Pixel frame held by one loop iteration: height x width x 3, uint8, RGB.
"""

from dataclasses import dataclass

import cv2
import numpy as np


@dataclass
class PixelFrame:
    """
    One captured image. `pixels` is a C-contiguous (height, width, 3) uint8
    array in R, G, B order. The pipeline draws into it in place.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray) or pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(
                f"PixelFrame needs a (height, width, 3) array, got shape "
                f"{getattr(pixels, 'shape', None)}"
            )
        if pixels.dtype != np.uint8:
            raise ValueError(f"PixelFrame needs uint8 pixels, got {pixels.dtype}")
        self.pixels = np.ascontiguousarray(pixels)

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @classmethod
    def from_bgr(cls, frame_bgr: np.ndarray) -> "PixelFrame":
        """Wrap an OpenCV BGR capture, fixing the channel order to RGB."""
        return cls(cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB))

    @classmethod
    def blank(cls, width: int, height: int) -> "PixelFrame":
        """All-black frame, mostly useful for tests and warm-up."""
        return cls(np.zeros((height, width, 3), dtype=np.uint8))
