"""
Working-resolution edge map with thresholds taken from image statistics.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .backend import VisionBackend
from .buffers import BufferScope
from .config import ProcessingConfig

logger = logging.getLogger(__name__)

MIN_LOW_THRESHOLD = 30
MAX_HIGH_THRESHOLD = 200


@dataclass
class PreprocessResult:
    """Edge map at working resolution and the factor back to source pixels."""

    edges: np.ndarray
    scale: float
    low_threshold: float
    high_threshold: float

    @property
    def working_shape(self) -> Tuple[int, int]:
        return self.edges.shape[:2]

    @property
    def working_area(self) -> int:
        h, w = self.working_shape
        return h * w


def adaptive_thresholds(mean: float, std: float) -> Tuple[float, float]:
    """Edge detector thresholds: low = max(30, mean - std), high = min(200, mean + 2 std)."""
    low = max(MIN_LOW_THRESHOLD, mean - std)
    high = min(MAX_HIGH_THRESHOLD, mean + 2 * std)
    return float(low), float(high)


def working_size(rows: int, cols: int, processing_size: int) -> Tuple[int, int, float]:
    """
    Size of the downscaled working image.

    Returns:
        Tuple (width, height, scale); scale is 1 when no downscaling is needed
    """
    longest = max(rows, cols)
    if longest <= processing_size:
        return cols, rows, 1.0

    scale = longest / processing_size
    width = max(1, int(round(cols / scale)))
    height = max(1, int(round(rows / scale)))
    return width, height, scale


def preprocess(
    image: np.ndarray,
    backend: VisionBackend,
    config: ProcessingConfig,
    scope: BufferScope
) -> PreprocessResult:
    """
    Downscale, grayscale, blur and edge-detect an image.

    Args:
        image: Source image (possibly rotated by the orientation step)
        backend: Vision backend
        config: Processing parameters
        scope: Owner of the intermediate buffers

    Returns:
        PreprocessResult with the edge map and the scale factor
    """
    rows, cols = image.shape[:2]
    width, height, scale = working_size(rows, cols, config.processing_size)

    if scale == 1.0:
        working = scope.track(image.copy())
    else:
        working = scope.track(backend.resize_area(image, width, height))

    gray = scope.track(backend.to_grayscale(working))
    blurred = scope.track(backend.gaussian_blur(gray, config.blur_kernel_size))

    mean, std = backend.mean_std(blurred)
    low, high = adaptive_thresholds(mean, std)

    edges = scope.track(backend.detect_edges(blurred, low, high))

    logger.debug(
        f"Preprocessed {cols}x{rows} -> {width}x{height} (scale={scale:.3f}), "
        f"mean={mean:.1f}, std={std:.1f}, canny=({low:.1f}, {high:.1f})"
    )

    return PreprocessResult(edges=edges, scale=scale, low_threshold=low, high_threshold=high)
