"""
Draw decoded boxes onto a frame in place.
"""

import logging
import math
from typing import Iterable, Tuple

import cv2

from facecam.decode import BBox
from facecam.frame import PixelFrame

logger = logging.getLogger(__name__)

OUTLINE_THICKNESS = 1


def clamp_box(box: BBox, width: int, height: int) -> Tuple[int, int, int, int] | None:
    """
    Map an untrusted box to a half-open pixel rectangle inside the frame.

    Origin is (round(x1), round(y1)), size is (x2 - x1, y2 - y1) rounded and
    floored at zero. The rectangle is clipped to [0, width) x [0, height).

    Returns:
        (left, top, right, bottom) with right/bottom exclusive, or None if
        nothing of the box is left after clipping or a coordinate is NaN/inf.
    """
    span_x = box.x2 - box.x1
    span_y = box.y2 - box.y1
    if not all(math.isfinite(v) for v in (box.x1, box.y1, span_x, span_y)):
        return None
    left = int(round(box.x1))
    top = int(round(box.y1))
    box_w = max(int(round(span_x)), 0)
    box_h = max(int(round(span_y)), 0)
    right = min(left + box_w, width)
    bottom = min(top + box_h, height)
    left = max(left, 0)
    top = max(top, 0)
    if right <= left or bottom <= top:
        return None
    return left, top, right, bottom


def draw_boxes(
    frame: PixelFrame,
    boxes: Iterable[BBox],
    color: Tuple[int, int, int] = (0, 255, 0),
    filled: bool = True,
) -> int:
    """
    Draw each box, in order, as a filled (or 1px outlined) rectangle.
    Later boxes overwrite earlier ones where they overlap.

    Returns:
        Number of boxes actually drawn (clipped-away boxes are skipped).
    """
    color = tuple(int(c) for c in color)
    thickness = cv2.FILLED if filled else OUTLINE_THICKNESS
    drawn = 0
    for box in boxes:
        logger.debug("box %s", box)
        rect = clamp_box(box, frame.width, frame.height)
        if rect is None:
            continue
        left, top, right, bottom = rect
        # cv2 corners are inclusive
        cv2.rectangle(frame.pixels, (left, top), (right - 1, bottom - 1), color, thickness)
        drawn += 1
    return drawn
