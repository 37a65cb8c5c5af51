"""
Perspective rectification of a detected quad.
"""

from typing import Tuple

import numpy as np

from .backend import VisionBackend
from .config import ProcessingConfig
from .geometry import edge_length


def target_size(quad: np.ndarray) -> Tuple[int, int]:
    """
    Output size of the rectified document.

    Args:
        quad: Ordered corners [TL, TR, BR, BL]

    Returns:
        Tuple (width, height) in pixels, each at least 1
    """
    tl, tr, br, bl = quad

    width = max(edge_length(tl, tr), edge_length(bl, br))
    height = max(edge_length(tl, bl), edge_length(tr, br))

    return max(1, int(round(width))), max(1, int(round(height)))


def warp_quad(
    image: np.ndarray,
    quad: np.ndarray,
    backend: VisionBackend,
    config: ProcessingConfig
) -> np.ndarray:
    """
    Map [TL, TR, BR, BL] of the full-resolution image onto an upright
    w x h rectangle.
    """
    width, height = target_size(quad)
    return backend.perspective_warp(image, quad, width, height, config.warp_interpolation)
