"""
Frame → detector input tensor.

The detector was trained on B, G, R input with raw 0–255 values, so the
encoder only reverses the channel order and promotes to float32. Scaling to
the cascade's input sizes happens inside the graph via DetectorParams.
"""

import numpy as np

from facecam.frame import PixelFrame

TENSOR_DTYPE = np.float32


def encode_frame(frame: PixelFrame, out: np.ndarray | None = None) -> np.ndarray:
    """
    Encode a frame as a (height, width, 3) float32 tensor in B, G, R order.

    Args:
        frame: RGB frame.
        out: optional buffer to write into; must already have the right
            shape and dtype. Every element is overwritten.

    Returns:
        The tensor (`out` itself when given).
    """
    shape = (frame.height, frame.width, 3)
    if out is None:
        out = np.empty(shape, dtype=TENSOR_DTYPE)
    elif out.shape != shape or out.dtype != TENSOR_DTYPE:
        raise ValueError(f"out buffer is {out.shape}/{out.dtype}, need {shape}/float32")
    np.copyto(out, frame.pixels[..., ::-1], casting="unsafe")
    return out


class TensorEncoder:
    """
    Encoder that keeps one scratch tensor across loop iterations.
    The buffer is reallocated when the frame size changes, otherwise fully
    overwritten, so nothing from an earlier frame leaks into the next.
    """

    def __init__(self):
        self._scratch: np.ndarray | None = None

    def encode(self, frame: PixelFrame) -> np.ndarray:
        shape = (frame.height, frame.width, 3)
        if self._scratch is None or self._scratch.shape != shape:
            self._scratch = np.empty(shape, dtype=TENSOR_DTYPE)
        return encode_frame(frame, out=self._scratch)
