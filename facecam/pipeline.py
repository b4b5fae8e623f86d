"""
Composes camera, detector and display; runs the capture–detect–display loop.
Camera, detector and display are separate APIs; this class only orchestrates them.
"""

import logging
from typing import TYPE_CHECKING

from facecam.annotate import draw_boxes
from facecam.camera import Camera
from facecam.codec import TensorEncoder
from facecam.config import PipelineConfig
from facecam.decode import decode_outputs
from facecam.display import Display, as_display_image, mirror
from facecam.errors import FrameSourceError, InferenceError
from facecam.frame import PixelFrame

if TYPE_CHECKING:
    from facecam.detector import Detector

logger = logging.getLogger(__name__)

# Per-frame failures: the frame is dropped and the loop moves on
SKIPPABLE_ERRORS = (FrameSourceError, InferenceError)


class FaceCameraPipeline:
    """
    Runs a loop: read frame → encode → detect → decode → draw boxes → mirror → show.
    Does not own camera, detector or display lifecycle; use the class method
    that creates them, or pass pre-constructed ones and close them yourself.

    The loop never returns on its own. It ends on KeyboardInterrupt (external
    stop) or on a fatal error, including too many dropped frames in a row.
    """

    def __init__(
        self,
        camera: Camera,
        detector: "Detector",
        display: Display,
        config: PipelineConfig = PipelineConfig(),
    ):
        self._camera = camera
        self._detector = detector
        self._display = display
        self._config = config
        self._encoder = TensorEncoder()
        self._frames_shown = 0
        self._failures = 0

    @property
    def frames_shown(self) -> int:
        return self._frames_shown

    def annotate(self, frame: PixelFrame) -> int:
        """
        Detect faces in the frame and draw them onto it in place.

        Returns:
            Number of boxes drawn.
        """
        tensor = self._encoder.encode(frame)
        outputs = self._detector.detect(tensor, self._config.detector)
        boxes = decode_outputs(outputs)
        drawn = draw_boxes(frame, boxes, color=self._config.draw_color, filled=self._config.filled)
        logger.debug("Frame %dx%d: %d face(s), %d drawn", frame.width, frame.height, len(boxes), drawn)
        return drawn

    def present(self, frame: PixelFrame) -> None:
        if self._config.mirror:
            frame = mirror(frame)
        self._display.present(self._config.frame_id, as_display_image(frame))
        self._frames_shown += 1

    def step(self) -> bool:
        """
        One full iteration. Returns False when the frame was dropped.
        Raises once max_consecutive_failures frames have been dropped in a row.
        """
        try:
            frame = self._camera.next_frame()
            self.annotate(frame)
        except SKIPPABLE_ERRORS as e:
            self._failures += 1
            logger.warning(
                "Dropping frame (%d/%d in a row), %s stage: %s",
                self._failures, self._config.max_consecutive_failures, e.stage, e,
            )
            if self._failures >= self._config.max_consecutive_failures:
                raise
            return False
        self._failures = 0
        self.present(frame)
        return True

    def run(self) -> None:
        self._failures = 0
        logger.info("Pipeline running. Stop with Ctrl+C.")
        while True:
            self.step()

    @classmethod
    def run_with_defaults(cls, config: PipelineConfig = PipelineConfig(), model_path: str | None = None) -> None:
        """Create camera, detector and window, run until stopped, then close all three."""
        # TensorFlow is only loaded when the real graph is used
        from facecam.detector import GraphDetector

        with GraphDetector.from_file(model_path) as detector:
            with Camera(camera_index=config.camera_index, width=config.width, height=config.height) as camera:
                with Display(title=config.window_title) as display:
                    cls(camera=camera, detector=detector, display=display, config=config).run()
