"""
Corner geometry: reducing polygons to four corners and ordering them
top-left, top-right, bottom-right, bottom-left.
"""

import numpy as np

from common.bounds import Bounds
from .errors import ValidationError


def _as_points(points, name: str = "points") -> np.ndarray:
    pts = np.asarray(points, dtype=np.float32)
    if pts.size % 2 != 0:
        raise ValidationError(f"{name} must be (x, y) pairs, got shape {pts.shape}")
    return pts.reshape(-1, 2)


def extreme_corners(points) -> np.ndarray:
    """
    Reduce a polygon to its 4 extreme corners.

    With exactly 4 points they are returned unchanged. With more, the points
    minimizing x+y (top-left), maximizing x-y (top-right), maximizing x+y
    (bottom-right) and minimizing x-y (bottom-left) are picked. If two of
    those coincide, the 4 points farthest from the centroid are used instead.

    Args:
        points: Array of shape (N, 2), N >= 4

    Returns:
        Array of shape (4, 2), a subset of the input points

    Raises:
        ValidationError: fewer than 4 points
    """
    pts = _as_points(points)
    if len(pts) < 4:
        raise ValidationError(f"extreme_corners needs at least 4 points, got {len(pts)}")

    if len(pts) == 4:
        return pts.copy()

    sums = pts.sum(axis=1)
    diffs = pts[:, 0] - pts[:, 1]

    indices = [
        int(np.argmin(sums)),
        int(np.argmax(diffs)),
        int(np.argmax(sums)),
        int(np.argmin(diffs)),
    ]

    if len(set(indices)) < 4:
        center = pts.mean(axis=0)
        distances = np.linalg.norm(pts - center, axis=1)
        # stable sort keeps the earliest point on equal distance
        indices = sorted(np.argsort(-distances, kind="stable")[:4].tolist())

    return pts[indices].copy()


def normalize_corners(points) -> np.ndarray:
    """
    Order exactly 4 points as [top-left, top-right, bottom-right, bottom-left].

    Top-left has the smallest x+y, bottom-right the largest x+y of the
    remaining points, and of the last two the one with larger x-y is
    top-right. The result is always a permutation of the input.

    Raises:
        ValidationError: not exactly 4 points
    """
    pts = _as_points(points)
    if len(pts) != 4:
        raise ValidationError(f"normalize_corners needs exactly 4 points, got {len(pts)}")

    remaining = list(range(4))

    tl = min(remaining, key=lambda i: pts[i].sum())
    remaining.remove(tl)

    br = max(remaining, key=lambda i: pts[i].sum())
    remaining.remove(br)

    a, b = remaining
    if pts[a][0] - pts[a][1] >= pts[b][0] - pts[b][1]:
        tr, bl = a, b
    else:
        tr, bl = b, a

    return pts[[tl, tr, br, bl]].copy()


def to_source_quad(polygon, scale: float) -> np.ndarray:
    """
    Turn a working-resolution polygon (4-8 vertices) into a canonical quad
    at source resolution.
    """
    corners = extreme_corners(polygon)
    return normalize_corners(corners * np.float32(scale))


def edge_length(p1: np.ndarray, p2: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(p2, dtype=np.float64) - np.asarray(p1, dtype=np.float64)))


def quad_bounds(quad) -> Bounds:
    return Bounds.from_points(_as_points(quad, "quad"))


def bounding_box_iou(quad_a, quad_b) -> float:
    """
    IOU of the axis-aligned bounding boxes of two quads.

    This approximates polygon overlap; rotated quads get boxes larger than
    themselves.
    """
    return quad_bounds(quad_a).iou(quad_bounds(quad_b))
