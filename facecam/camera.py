"""
Frame source over cv2.VideoCapture. Hands out RGB PixelFrames; knows nothing
about detection or display.
"""

import logging
import time
from dataclasses import dataclass

import cv2

from facecam.errors import FrameSourceError
from facecam.frame import PixelFrame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadRetry:
    """How hard next_frame() tries before giving up on the device."""

    attempts: int = 5
    delay_sec: float = 0.05
    reconnect_delay_sec: float = 0.5


class Camera:
    """
    Opened once at construction, released by close() or the with-block.
    A failed read is retried, then the device is reopened once.
    """

    def __init__(
        self,
        camera_index: int = 0,
        width: int | None = None,
        height: int | None = None,
        read_retries: int = ReadRetry.attempts,
        retry_delay_sec: float = ReadRetry.delay_sec,
        reconnect_delay_sec: float = ReadRetry.reconnect_delay_sec,
    ):
        self._index = camera_index
        # buffer of 1 so each read returns the newest frame, not a queued one
        self._props = {cv2.CAP_PROP_BUFFERSIZE: 1}
        if width is not None:
            self._props[cv2.CAP_PROP_FRAME_WIDTH] = width
        if height is not None:
            self._props[cv2.CAP_PROP_FRAME_HEIGHT] = height
        self._retry = ReadRetry(read_retries, retry_delay_sec, reconnect_delay_sec)
        self._cap = self._connect()
        if self._cap is None:
            raise FrameSourceError(
                f"Could not open camera (index={camera_index}); "
                "check that it exists and is not held by another process"
            )
        logger.info("Opened camera %d", camera_index)

    def _connect(self) -> cv2.VideoCapture | None:
        cap = cv2.VideoCapture(self._index)
        if not cap.isOpened():
            cap.release()
            return None
        for prop, value in self._props.items():
            cap.set(prop, value)
        return cap

    def _grab(self):
        ok, frame = self._cap.read()
        return frame if ok else None

    def _read_bgr(self):
        frame = self._grab()
        attempt = 0
        while frame is None and attempt < self._retry.attempts:
            time.sleep(self._retry.delay_sec)
            frame = self._grab()
            attempt += 1
        if frame is not None:
            return frame

        logger.warning("Camera %d returned no frame after %d retries, reconnecting",
                       self._index, self._retry.attempts)
        self._cap.release()
        time.sleep(self._retry.reconnect_delay_sec)
        self._cap = self._connect()
        return None if self._cap is None else self._grab()

    def next_frame(self) -> PixelFrame:
        """
        Block until the next frame.

        Raises:
            FrameSourceError: closed camera, or still no frame after the
                retries and one reconnect.
        """
        if self._cap is None:
            raise FrameSourceError(f"Camera {self._index} is closed")
        frame = self._read_bgr()
        if frame is None:
            raise FrameSourceError(f"Camera {self._index} stopped returning frames")
        return PixelFrame.from_bgr(frame)

    def close(self) -> None:
        cap, self._cap = self._cap, None
        if cap is not None:
            cap.release()

    def __enter__(self) -> "Camera":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
