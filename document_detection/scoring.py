"""
Confidence score (0-100) of a candidate polygon.
"""

import math

from common.bounds import Bounds

IMPERFECT_SHAPE_PENALTY = 10
SOLIDITY_FLOOR = 0.9
ASPECT_RATIO_RANGE = (0.2, 5.0)
ASPECT_RATIO_PENALTY = 25


def solidity(contour_area: float, bounds: Bounds) -> float:
    box_area = bounds.area()
    if box_area <= 0:
        return 0.0
    return contour_area / box_area


def score_candidate(vertex_count: int, contour_area: float, bounds: Bounds) -> int:
    """
    Rate how much a polygon looks like a scanned page.

    Starts at 100 and subtracts:
      - 10 when the polygon had more than 4 vertices,
      - floor((0.9 - solidity) * 100) when solidity < 0.9,
      - 25 when the bounding box aspect ratio is outside [0.2, 5].

    Args:
        vertex_count: Vertices of the approximated polygon
        contour_area: Area of the contour
        bounds: Axis-aligned bounding box of the contour

    Returns:
        Confidence clamped to [0, 100]
    """
    confidence = 100

    if vertex_count > 4:
        confidence -= IMPERFECT_SHAPE_PENALTY

    s = solidity(contour_area, bounds)
    if s < SOLIDITY_FLOOR:
        confidence -= max(0, math.floor((SOLIDITY_FLOOR - s) * 100))

    aspect = bounds.aspect_ratio()
    low, high = ASPECT_RATIO_RANGE
    if aspect < low or aspect > high:
        confidence -= ASPECT_RATIO_PENALTY

    return max(0, min(100, int(confidence)))


def is_confident(confidence: int, threshold: int) -> bool:
    """Candidates are kept only strictly above the threshold."""
    return confidence > threshold
