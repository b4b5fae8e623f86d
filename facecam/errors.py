"""
Error types for the capture → detect → display pipeline.
Each error names the stage that raised it so the entry point can report it.
"""


class FaceCamError(RuntimeError):
    """Base class for pipeline errors. `stage` names the failing step."""

    stage = "pipeline"


class ModelLoadError(FaceCamError):
    """The bundled graph blob is missing or could not be parsed/imported."""

    stage = "model"


class ModelInterfaceError(FaceCamError):
    """A required named input or output is absent from the loaded graph."""

    stage = "model"


class FrameSourceError(FaceCamError):
    """Camera could not be opened, or stopped delivering frames."""

    stage = "camera"


class InferenceError(FaceCamError):
    """The detector failed while running on a single frame."""

    stage = "inference"


class ContractError(FaceCamError):
    """Detector outputs do not match the expected box/score layout."""

    stage = "decode"


class DisplayError(FaceCamError):
    """The display window rejected a frame."""

    stage = "display"
