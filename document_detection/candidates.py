"""
Polygon candidates from the working-resolution edge map.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from common.bounds import Bounds
from .backend import VisionBackend
from .config import ProcessingConfig

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    """
    One accepted contour on its way to becoming a document.

    raw_polygon and bounds are in working-resolution pixels; quad is filled
    in at source resolution by the corner normalizer.
    """

    raw_polygon: np.ndarray
    contour_area: float
    bounds: Bounds
    quad: Optional[np.ndarray] = None
    confidence: int = 0

    @property
    def vertex_count(self) -> int:
        return len(self.raw_polygon)


def extract_candidates(
    edges: np.ndarray,
    backend: VisionBackend,
    config: ProcessingConfig,
    checkpoint: Optional[Callable[[], None]] = None
) -> List[Candidate]:
    """
    Find convex polygons with an accepted vertex count.

    Args:
        edges: Edge map at working resolution
        backend: Vision backend
        config: Processing parameters
        checkpoint: Called before each contour; may raise to stop the scan

    Returns:
        Candidates in contour order
    """
    contours = backend.find_external_contours(edges)
    working_area = edges.shape[0] * edges.shape[1]
    min_area = config.min_area_fraction * working_area
    min_vertices, max_vertices = config.accepted_vertex_range

    candidates = []
    for i, contour in enumerate(contours):
        if checkpoint is not None:
            checkpoint()

        area = backend.contour_area(contour)
        if area < min_area:
            continue

        peri = backend.arc_length(contour, True)
        polygon = backend.approx_polygon(contour, config.approx_epsilon_factor * peri)

        if not min_vertices <= len(polygon) <= max_vertices:
            logger.debug(f"Contour {i}: area={area:.0f}, {len(polygon)} vertices (rejected)")
            continue

        if not backend.is_convex(polygon):
            logger.debug(f"Contour {i}: area={area:.0f}, {len(polygon)} vertices, not convex (rejected)")
            continue

        candidates.append(Candidate(
            raw_polygon=polygon.astype(np.float32),
            contour_area=area,
            bounds=backend.bounding_rect(contour)
        ))

    logger.debug(f"{len(candidates)} candidate(s) from {len(contours)} contour(s)")
    return candidates
