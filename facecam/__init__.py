"""
Live camera face detection: capture → MTCNN graph → boxes → mirrored window.
"""

from facecam.annotate import clamp_box, draw_boxes
from facecam.codec import TensorEncoder, encode_frame
from facecam.config import DetectorParams, PipelineConfig
from facecam.decode import BBox, BoxSequence, RawOutputPair, decode_boxes
from facecam.display import DisplayImage, as_display_image, mirror
from facecam.errors import (
    ContractError,
    DisplayError,
    FaceCamError,
    FrameSourceError,
    InferenceError,
    ModelInterfaceError,
    ModelLoadError,
)
from facecam.frame import PixelFrame

__version__ = "0.1.0"

__all__ = [
    "BBox",
    "BoxSequence",
    "ContractError",
    "DetectorParams",
    "DisplayError",
    "DisplayImage",
    "FaceCamError",
    "FrameSourceError",
    "InferenceError",
    "ModelInterfaceError",
    "ModelLoadError",
    "PipelineConfig",
    "PixelFrame",
    "RawOutputPair",
    "TensorEncoder",
    "as_display_image",
    "clamp_box",
    "decode_boxes",
    "draw_boxes",
    "encode_frame",
    "mirror",
]
