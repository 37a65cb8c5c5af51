"""
Heuristic 90 degree orientation correction.

Counts edge pixels in a horizontal band around the vertical midline and in a
vertical band around the horizontal midline. A page lying on its side puts
most of its edges into the horizontal band.
"""

import logging
from typing import Tuple

import numpy as np

from .backend import VisionBackend
from .config import ProcessingConfig

logger = logging.getLogger(__name__)

# Canny thresholds for the orientation edge map
ORIENTATION_CANNY = (50, 150)


def sample_stride(rows: int, cols: int, grid_points: int) -> int:
    return max(1, max(rows, cols) // grid_points)


def edge_band_counts(edges: np.ndarray, band_fraction: float = 0.2, stride: int = 1) -> Tuple[int, int]:
    """
    Count sampled edge pixels inside the two midline bands.

    A pixel counts as horizontal when its row is within band_fraction * rows
    of the vertical midline, and as vertical when its column is within
    band_fraction * cols of the horizontal midline. Pixels near the image
    center count in both.

    Returns:
        Tuple (horizontal_count, vertical_count)
    """
    rows, cols = edges.shape[:2]

    ys = np.arange(0, rows, stride)
    xs = np.arange(0, cols, stride)
    sampled = edges[::stride, ::stride] > 0

    row_in_band = np.abs(ys - rows / 2.0) <= band_fraction * rows
    col_in_band = np.abs(xs - cols / 2.0) <= band_fraction * cols

    horizontal = int(np.count_nonzero(sampled[row_in_band, :]))
    vertical = int(np.count_nonzero(sampled[:, col_in_band]))
    return horizontal, vertical


def orientation_ratio(horizontal: int, vertical: int) -> float:
    if vertical == 0:
        return 1.0
    return horizontal / vertical


def correct_orientation(
    image: np.ndarray,
    backend: VisionBackend,
    config: ProcessingConfig
) -> Tuple[np.ndarray, bool]:
    """
    Rotate the image 90 degrees clockwise when its edges are strongly horizontal.

    Best effort: any failure is logged and the image is returned unrotated.

    Args:
        image: Full-resolution source image
        backend: Vision backend
        config: Processing parameters (rotation_ratio_threshold, band settings)

    Returns:
        Tuple (image, rotated)
    """
    try:
        gray = backend.to_grayscale(image)
        edges = backend.detect_edges(gray, *ORIENTATION_CANNY)
        del gray

        rows, cols = edges.shape[:2]
        stride = sample_stride(rows, cols, config.orientation_grid_points)
        horizontal, vertical = edge_band_counts(edges, config.orientation_band_fraction, stride)
        del edges

        ratio = orientation_ratio(horizontal, vertical)
        logger.debug(
            f"Orientation: horizontal={horizontal}, vertical={vertical}, "
            f"ratio={ratio:.2f}, stride={stride}"
        )

        if ratio > config.rotation_ratio_threshold:
            logger.info(f"Rotating image 90 degrees clockwise (edge ratio {ratio:.2f})")
            return backend.rotate_90_clockwise(image), True

        return image, False

    except Exception as e:
        logger.warning(f"Orientation correction failed, using unrotated image: {e}")
        return image, False
