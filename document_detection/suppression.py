"""
Non-maximum suppression of overlapping candidates.
"""

import logging
from typing import List, Sequence

from .candidates import Candidate
from .geometry import bounding_box_iou

logger = logging.getLogger(__name__)


def non_max_suppression(candidates: Sequence[Candidate], iou_threshold: float = 0.5) -> List[Candidate]:
    """
    Keep the most confident candidate of every overlapping group.

    Candidates are visited by confidence, highest first (ties keep input
    order). Each kept candidate suppresses every later one whose bounding-box
    IOU with it is >= iou_threshold.

    Args:
        candidates: Scored candidates with source-resolution quads
        iou_threshold: Overlap at which a candidate is suppressed

    Returns:
        Kept candidates, highest confidence first
    """
    if len(candidates) <= 1:
        return list(candidates)

    ordered = sorted(candidates, key=lambda c: c.confidence, reverse=True)
    suppressed = [False] * len(ordered)
    keep = []

    for i, current in enumerate(ordered):
        if suppressed[i]:
            continue
        keep.append(current)

        for j in range(i + 1, len(ordered)):
            if suppressed[j]:
                continue
            iou = bounding_box_iou(current.quad, ordered[j].quad)
            if iou >= iou_threshold:
                suppressed[j] = True
                logger.debug(
                    f"Suppressing candidate (IoU={iou:.2f}): "
                    f"conf={ordered[j].confidence} under conf={current.confidence}"
                )

    logger.debug(f"Non-maximum suppression: {len(candidates)} -> {len(keep)} candidates")
    return keep
