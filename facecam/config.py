"""
Startup configuration: detector scalar params and pipeline settings.
Built once before the loop starts and passed by reference; never mutated.
"""

from dataclasses import dataclass
from typing import Tuple

# MTCNN defaults the bundled graph was exported with
DEFAULT_MIN_SIZE = 40.0
DEFAULT_THRESHOLDS = (0.6, 0.7, 0.7)
DEFAULT_FACTOR = 0.709

DEFAULT_CAMERA_INDEX = 0
DEFAULT_WINDOW_TITLE = "image"
DEFAULT_FRAME_ID = "image-001"
DEFAULT_DRAW_COLOR = (0, 255, 0)  # green, RGB
DEFAULT_MAX_CONSECUTIVE_FAILURES = 30


@dataclass(frozen=True)
class DetectorParams:
    """
    Scalar inputs fed to the detector graph on every run.

    min_size: smallest face (pixels) the cascade considers.
    thresholds: one confidence cutoff per cascade stage (exactly 3).
    factor: pyramid scale-down factor per stage, in (0, 1).
    """

    min_size: float = DEFAULT_MIN_SIZE
    thresholds: Tuple[float, float, float] = DEFAULT_THRESHOLDS
    factor: float = DEFAULT_FACTOR

    def __post_init__(self) -> None:
        thresholds = tuple(float(t) for t in self.thresholds)
        if len(thresholds) != 3:
            raise ValueError(f"thresholds needs exactly 3 values, got {len(thresholds)}")
        if any(not 0.0 <= t <= 1.0 for t in thresholds):
            raise ValueError(f"thresholds must lie in [0, 1], got {thresholds}")
        if not self.min_size > 0:
            raise ValueError(f"min_size must be positive, got {self.min_size}")
        if not 0.0 < self.factor < 1.0:
            raise ValueError(f"factor must lie in (0, 1), got {self.factor}")
        # frozen: go through object.__setattr__ to store the normalized values
        object.__setattr__(self, "thresholds", thresholds)
        object.__setattr__(self, "min_size", float(self.min_size))
        object.__setattr__(self, "factor", float(self.factor))


@dataclass(frozen=True)
class PipelineConfig:
    """Everything the capture → detect → display loop needs at startup."""

    camera_index: int = DEFAULT_CAMERA_INDEX
    width: int | None = None
    height: int | None = None
    window_title: str = DEFAULT_WINDOW_TITLE
    frame_id: str = DEFAULT_FRAME_ID
    draw_color: Tuple[int, int, int] = DEFAULT_DRAW_COLOR
    filled: bool = True
    mirror: bool = True
    max_consecutive_failures: int = DEFAULT_MAX_CONSECUTIVE_FAILURES
    detector: DetectorParams = DetectorParams()

    def __post_init__(self) -> None:
        if len(self.draw_color) != 3 or any(not 0 <= c <= 255 for c in self.draw_color):
            raise ValueError(f"draw_color must be 3 values in [0, 255], got {self.draw_color}")
        if self.max_consecutive_failures < 1:
            raise ValueError("max_consecutive_failures must be at least 1")
