"""
Orientation adapter and display window. No capture or inference logic.
"""

import logging
from dataclasses import dataclass

import cv2
import numpy as np

from facecam.errors import DisplayError
from facecam.frame import PixelFrame

logger = logging.getLogger(__name__)

PIXEL_FORMAT_RGB8 = "rgb8"
BYTES_PER_PIXEL = 3


def mirror(frame: PixelFrame) -> PixelFrame:
    """Flip left ↔ right: column c swaps with width-1-c. The camera view is mirrored."""
    return PixelFrame(np.ascontiguousarray(frame.pixels[:, ::-1]))


@dataclass(frozen=True)
class DisplayImage:
    """Raw RGB bytes plus the size/stride metadata the window needs."""

    data: np.ndarray
    width: int
    height: int
    pixel_stride: int = BYTES_PER_PIXEL
    row_stride: int | None = None
    pixel_format: str = PIXEL_FORMAT_RGB8

    def __post_init__(self) -> None:
        if self.row_stride is None:
            object.__setattr__(self, "row_stride", self.width * self.pixel_stride)

    def as_array(self) -> np.ndarray:
        return self.data.reshape(self.height, self.width, BYTES_PER_PIXEL)


def as_display_image(frame: PixelFrame) -> DisplayImage:
    """Repackage the frame's bytes unchanged; only metadata is added."""
    return DisplayImage(
        data=frame.pixels.reshape(-1),
        width=frame.width,
        height=frame.height,
        pixel_stride=BYTES_PER_PIXEL,
        row_stride=frame.width * BYTES_PER_PIXEL,
    )


class Display:
    """
    OpenCV window. Use as context manager so the window is destroyed.
    The window holds B, G, R, so RGB images are converted on present().
    """

    def __init__(self, title: str = "image", wait_ms: int = 1):
        self._title = title
        self._wait_ms = wait_ms
        cv2.namedWindow(self._title, cv2.WINDOW_AUTOSIZE)

    @property
    def title(self) -> str:
        return self._title

    def present(self, frame_id: str, image: DisplayImage) -> None:
        if image.pixel_format != PIXEL_FORMAT_RGB8:
            raise DisplayError(f"unsupported pixel format {image.pixel_format!r}")
        try:
            cv2.imshow(self._title, cv2.cvtColor(image.as_array(), cv2.COLOR_RGB2BGR))
        except cv2.error as e:
            raise DisplayError(f"could not show {frame_id}: {e}") from e
        # imshow only paints while the event loop is pumped; keys are ignored
        cv2.waitKey(self._wait_ms)

    def close(self) -> None:
        try:
            cv2.destroyWindow(self._title)
        except cv2.error as e:
            logger.debug("window %s already gone: %s", self._title, e)

    def __enter__(self) -> "Display":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
