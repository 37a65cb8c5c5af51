"""
Scoped ownership of intermediate image buffers.
"""

import logging
from typing import List

import numpy as np

logger = logging.getLogger(__name__)


class BufferScope:
    """
    Holds the intermediate buffers of one scan (or one candidate) and drops
    them when the scope exits, on success and on error alike.

    Usage:
        with BufferScope("scan") as scope:
            gray = scope.track(backend.to_grayscale(image))
    """

    def __init__(self, label: str = "scan"):
        self.label = label
        self.released = False
        self._buffers: List[np.ndarray] = []

    def __enter__(self) -> "BufferScope":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.release()
        return False

    def __len__(self) -> int:
        return len(self._buffers)

    def track(self, buffer: np.ndarray) -> np.ndarray:
        """Register a buffer with this scope and hand it back."""
        if self.released:
            raise RuntimeError(f"Buffer scope '{self.label}' is already released")
        self._buffers.append(buffer)
        return buffer

    @property
    def nbytes(self) -> int:
        return sum(getattr(b, "nbytes", 0) for b in self._buffers)

    def release(self) -> None:
        if self.released:
            return
        count, size = len(self._buffers), self.nbytes
        self._buffers.clear()
        self.released = True
        logger.debug(f"Released {count} buffer(s) ({size} bytes) from scope '{self.label}'")
