"""
Scan results.
"""

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np


@dataclass(frozen=True, eq=False)
class ScannedDocument:
    """
    A rectified document produced by a scan.

    Attributes:
        id: Unique identifier from the scanner's id generator
        image_data: Encoded image bytes (format from the config)
        confidence: Score in [0, 100]
        corners: Read-only (4, 2) array [TL, TR, BR, BL] in source pixels
        width: Width of the rectified image
        height: Height of the rectified image
    """

    id: str
    image_data: bytes
    confidence: int
    corners: np.ndarray
    width: int = 0
    height: int = 0
    metadata: Dict[str, object] = field(default_factory=dict)

    def __post_init__(self):
        corners = np.array(self.corners, dtype=np.float32).reshape(4, 2)
        corners.setflags(write=False)
        object.__setattr__(self, "corners", corners)

    @property
    def top_left(self) -> np.ndarray:
        return self.corners[0]

    def corners_list(self) -> List[List[float]]:
        return [[float(x), float(y)] for x, y in self.corners]

    def to_dict(self) -> Dict[str, object]:
        """JSON-friendly view without the image bytes."""
        return {
            "id": self.id,
            "confidence": self.confidence,
            "corners": self.corners_list(),
            "width": self.width,
            "height": self.height,
        }
