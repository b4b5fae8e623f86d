"""
Detector outputs → bounding boxes.

The graph emits `box` as runs of 4 floats in (y1, x1, y2, x2) order, row
coordinate first, and `prob` with one score per run.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np

from facecam.errors import ContractError

logger = logging.getLogger(__name__)

COORDS_PER_BOX = 4


@dataclass(frozen=True)
class BBox:
    """One detected face. Pixel-space floats straight from the model, unclamped."""

    y1: float
    x1: float
    y2: float
    x2: float
    prob: float


@dataclass(frozen=True)
class RawOutputPair:
    """The detector's two correlated outputs for one frame."""

    coordinates: np.ndarray
    scores: np.ndarray

    @classmethod
    def from_arrays(cls, coordinates, scores) -> "RawOutputPair":
        """Flatten whatever the runtime returned, e.g. a (N, 4) box array."""
        return cls(
            coordinates=np.asarray(coordinates, dtype=np.float64).ravel(),
            scores=np.asarray(scores, dtype=np.float64).ravel(),
        )


class BoxSequence:
    """
    Lazy, restartable view over decoded boxes in model output order.
    Boxes are built on iteration; iterating again yields the same boxes.
    """

    def __init__(self, coordinates: np.ndarray, scores: np.ndarray):
        self._coordinates = coordinates
        self._scores = scores

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[BBox]:
        groups = self._coordinates.reshape(-1, COORDS_PER_BOX)
        for (y1, x1, y2, x2), prob in zip(groups, self._scores):
            yield BBox(y1=float(y1), x1=float(x1), y2=float(y2), x2=float(x2), prob=float(prob))

    def __repr__(self) -> str:
        return f"BoxSequence(n={len(self)})"


def decode_boxes(coordinates: Sequence[float], scores: Sequence[float]) -> BoxSequence:
    """
    Pair each run of 4 coordinates with its score.

    Raises:
        ContractError: if len(coordinates) != 4 * len(scores). The loaded
            graph does not match the expected interface; nothing is decoded.
    """
    coords = np.asarray(coordinates, dtype=np.float64).ravel()
    probs = np.asarray(scores, dtype=np.float64).ravel()
    if coords.size != COORDS_PER_BOX * probs.size:
        raise ContractError(
            f"detector returned {coords.size} box coordinates for {probs.size} "
            f"scores; expected {COORDS_PER_BOX * probs.size}"
        )
    return BoxSequence(coords, probs)


def decode_outputs(outputs: RawOutputPair) -> BoxSequence:
    return decode_boxes(outputs.coordinates, outputs.scores)
