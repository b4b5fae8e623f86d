"""
Face detection inference using a frozen MTCNN TensorFlow graph.

The graph is a black box with a fixed interface: four named inputs
(`input`, `min_size`, `thresholds`, `factor`) and two named outputs
(`box`, `prob`). Anything satisfying `Detector` can stand in for it.
"""

import logging
import os
from typing import Protocol

import numpy as np
import tensorflow as tf
from google.protobuf.message import DecodeError

from facecam.config import DetectorParams
from facecam.decode import RawOutputPair
from facecam.errors import InferenceError, ModelInterfaceError, ModelLoadError

logger = logging.getLogger(__name__)

MODEL_FILENAME = "mtcnn.pb"

INPUT_OP = "input"
MIN_SIZE_OP = "min_size"
THRESHOLDS_OP = "thresholds"
FACTOR_OP = "factor"
BOX_OP = "box"
PROB_OP = "prob"

FEED_OPS = (INPUT_OP, MIN_SIZE_OP, THRESHOLDS_OP, FACTOR_OP)
FETCH_OPS = (BOX_OP, PROB_OP)


class Detector(Protocol):
    """Anything that turns one encoded frame into raw box/score outputs."""

    def detect(self, tensor: np.ndarray, params: DetectorParams) -> RawOutputPair:
        ...


def default_model_path() -> str:
    """Graph blob shipped inside the package."""
    return os.path.join(os.path.dirname(__file__), "models", MODEL_FILENAME)


def load_graph(data: bytes) -> tf.Graph:
    """
    Parse a serialized GraphDef and import it into a fresh graph.

    Raises:
        ModelLoadError: if the bytes are not a valid graph.
    """
    graph_def = tf.compat.v1.GraphDef()
    try:
        graph_def.ParseFromString(data)
    except DecodeError as e:
        raise ModelLoadError(f"could not parse model graph: {e}") from e
    graph = tf.Graph()
    with graph.as_default():
        try:
            tf.compat.v1.import_graph_def(graph_def, name="")
        except ValueError as e:
            raise ModelLoadError(f"could not import model graph: {e}") from e
    return graph


def _require_tensor(graph: tf.Graph, op_name: str) -> tf.Tensor:
    try:
        op = graph.get_operation_by_name(op_name)
    except KeyError as e:
        raise ModelInterfaceError(
            f"model graph has no operation named {op_name!r}"
        ) from e
    if not op.outputs:
        raise ModelInterfaceError(f"model operation {op_name!r} has no outputs")
    return op.outputs[0]


class GraphDetector:
    """
    Runs the MTCNN graph on one frame at a time. Stateless per call; the
    session is only released on close. Use as a context manager.
    """

    def __init__(self, graph: tf.Graph):
        self._graph = graph
        feeds = {name: _require_tensor(graph, name) for name in FEED_OPS}
        fetches = {name: _require_tensor(graph, name) for name in FETCH_OPS}
        self._input = feeds[INPUT_OP]
        self._min_size = feeds[MIN_SIZE_OP]
        self._thresholds = feeds[THRESHOLDS_OP]
        self._factor = feeds[FACTOR_OP]
        self._fetches = [fetches[BOX_OP], fetches[PROB_OP]]
        self._session = tf.compat.v1.Session(graph=graph)

    @classmethod
    def from_bytes(cls, data: bytes) -> "GraphDetector":
        return cls(load_graph(data))

    @classmethod
    def from_file(cls, model_path: str | None = None) -> "GraphDetector":
        """Load the bundled graph (or the one at model_path)."""
        path = model_path or default_model_path()
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise ModelLoadError(f"could not read model graph {path}: {e}") from e
        logger.info("Loaded model graph %s (%d bytes)", path, len(data))
        return cls.from_bytes(data)

    def detect(self, tensor: np.ndarray, params: DetectorParams) -> RawOutputPair:
        """
        Run the cascade on one encoded frame.

        Args:
            tensor: (height, width, 3) float32, B, G, R order.
            params: scalar inputs fed alongside the image.

        Returns:
            Flat box coordinates (4 per face) and one score per face.
        """
        if self._session is None:
            raise InferenceError("detector is closed")
        feed = {
            self._input: tensor,
            self._min_size: np.float32(params.min_size),
            self._thresholds: np.asarray(params.thresholds, dtype=np.float32),
            self._factor: np.float32(params.factor),
        }
        try:
            box, prob = self._session.run(self._fetches, feed_dict=feed)
        except (tf.errors.OpError, ValueError) as e:
            raise InferenceError(f"detector run failed: {e}") from e
        return RawOutputPair.from_arrays(box, prob)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "GraphDetector":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
