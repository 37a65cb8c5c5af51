"""
Multi-document scanner.

Finds every quadrilateral document in an image, scores it, removes
duplicates and returns perspective-corrected crops in reading order.
"""

import logging
import threading
import time
from pathlib import Path
from typing import Callable, List, Optional, Union

import numpy as np

from .assembler import order_documents
from .backend import VisionBackend, create_backend
from .buffers import BufferScope
from .candidates import Candidate, extract_candidates
from .config import ProcessingConfig, get_config
from .document import ScannedDocument
from .errors import (
    BackendUnavailable,
    CandidateProcessingError,
    LoadError,
    ScanCancelled,
    ScanTimeout,
)
from .geometry import normalize_corners, to_source_quad
from .ids import UuidIdGenerator
from .orientation import correct_orientation
from .preprocessor import preprocess
from .scoring import is_confident, score_candidate
from .suppression import non_max_suppression
from .warper import warp_quad

logger = logging.getLogger(__name__)


def make_checkpoint(
    cancel_event: Optional[threading.Event] = None,
    timeout: Optional[float] = None
) -> Callable[[], None]:
    """
    Build a callable that raises once the scan is cancelled or past its deadline.
    """
    deadline = time.monotonic() + timeout if timeout is not None else None

    def checkpoint():
        if cancel_event is not None and cancel_event.is_set():
            raise ScanCancelled("Scan was cancelled")
        if deadline is not None and time.monotonic() >= deadline:
            raise ScanTimeout(f"Scan exceeded its {timeout:.3f}s deadline")

    return checkpoint


class DocumentScanner:
    """
    Detects and rectifies zero or more documents in one image.

    The pipeline is: orientation correction, preprocessing, candidate
    extraction, then per candidate corner normalization and scoring,
    duplicate suppression, perspective warp, and finally ordering.

    Scanners hold no per-scan state, so one instance can serve concurrent
    scans; only the id generator is shared.
    """

    def __init__(
        self,
        backend: Optional[VisionBackend] = None,
        config: Optional[ProcessingConfig] = None,
        id_generator: Optional[Callable[[], str]] = None
    ):
        """
        Initialize the scanner.

        Args:
            backend: Vision backend; an OpenCV backend is created when omitted
            config: Default processing parameters (process-wide default when omitted)
            id_generator: Zero-argument callable producing document ids

        Raises:
            BackendUnavailable: The backend is missing or not ready
        """
        if backend is None:
            backend = create_backend()
        elif not backend.is_ready():
            raise BackendUnavailable(f"Backend '{backend.name}' is not ready")

        self.backend = backend
        self.config = config if config is not None else get_config()
        self.id_generator = id_generator if id_generator is not None else UuidIdGenerator()

    def scan(
        self,
        image: np.ndarray,
        config: Optional[ProcessingConfig] = None,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[float] = None
    ) -> List[ScannedDocument]:
        """
        Scan an image for documents.

        Args:
            image: Decoded image (BGR, BGRA or grayscale)
            config: Parameters for this call; the scanner's default otherwise
            cancel_event: Set it from another thread to stop the scan
            timeout: Deadline in seconds; config.timeout_seconds otherwise

        Returns:
            Documents ordered by confidence, then reading position.
            An empty list means no document was found.

        Raises:
            LoadError: image is None or empty
            ScanCancelled: cancel_event was set
            ScanTimeout: the deadline passed
        """
        if image is None or not isinstance(image, np.ndarray) or image.size == 0:
            raise LoadError("Image is empty or was not loaded")

        config = config if config is not None else self.config
        if timeout is None:
            timeout = config.timeout_seconds
        checkpoint = make_checkpoint(cancel_event, timeout)

        with BufferScope("scan") as scope:
            oriented, rotated = correct_orientation(image, self.backend, config)
            if rotated:
                scope.track(oriented)

            prepared = preprocess(oriented, self.backend, config, scope)
            candidates = extract_candidates(prepared.edges, self.backend, config, checkpoint)

            scored = []
            for index, candidate in enumerate(candidates):
                checkpoint()
                try:
                    self._normalize_and_score(candidate, prepared.scale)
                except CandidateProcessingError as e:
                    logger.warning(f"Skipping candidate {index}: {e}")
                    continue

                if is_confident(candidate.confidence, config.confidence_threshold):
                    scored.append(candidate)
                else:
                    logger.debug(f"Dropping candidate {index}: confidence {candidate.confidence}")

            kept = non_max_suppression(scored, config.iou_threshold)

            documents = []
            for candidate in kept:
                checkpoint()
                try:
                    documents.append(self._build_document(oriented, candidate, config, rotated))
                except CandidateProcessingError as e:
                    logger.warning(f"Skipping candidate with confidence {candidate.confidence}: {e}")

        logger.info(f"Found {len(documents)} document(s)")
        return order_documents(documents)

    def scan_best(
        self,
        image: np.ndarray,
        config: Optional[ProcessingConfig] = None
    ) -> Optional[ScannedDocument]:
        """Most confident document, or None when nothing qualifies."""
        documents = self.scan(image, config)
        return documents[0] if documents else None

    def scan_bytes(self, data: bytes, config: Optional[ProcessingConfig] = None) -> List[ScannedDocument]:
        """Decode encoded image bytes and scan them."""
        image = self.backend.decode(data)
        return self.scan(image, config)

    def scan_file(self, path: Union[str, Path], config: Optional[ProcessingConfig] = None) -> List[ScannedDocument]:
        """Read, decode and scan an image file."""
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise LoadError(f"Failed to read image: {path}: {e}") from e
        return self.scan_bytes(data, config)

    def crop(
        self,
        image: np.ndarray,
        corners,
        config: Optional[ProcessingConfig] = None
    ) -> ScannedDocument:
        """
        Rectify caller-supplied corners, e.g. from a manual corner editor.

        Args:
            image: Full-resolution image the corners refer to
            corners: Exactly 4 points in any order

        Returns:
            ScannedDocument with confidence 100

        Raises:
            LoadError: image is None or empty
            ValidationError: corners are not 4 points
        """
        if image is None or not isinstance(image, np.ndarray) or image.size == 0:
            raise LoadError("Image is empty or was not loaded")

        config = config if config is not None else self.config
        quad = normalize_corners(corners)
        candidate = Candidate(
            raw_polygon=quad,
            contour_area=0.0,
            bounds=None,
            quad=quad,
            confidence=100
        )
        return self._build_document(image, candidate, config, rotated=False)

    def _normalize_and_score(self, candidate: Candidate, scale: float) -> None:
        try:
            candidate.quad = to_source_quad(candidate.raw_polygon, scale)
            candidate.confidence = score_candidate(
                candidate.vertex_count,
                candidate.contour_area,
                candidate.bounds
            )
        except Exception as e:
            raise CandidateProcessingError(f"normalization failed: {e}", stage="normalize") from e

    def _build_document(
        self,
        image: np.ndarray,
        candidate: Candidate,
        config: ProcessingConfig,
        rotated: bool
    ) -> ScannedDocument:
        with BufferScope("candidate") as scope:
            try:
                warped = scope.track(warp_quad(image, candidate.quad, self.backend, config))
                data = self.backend.encode(warped, config.output_format, config.output_encoding_quality)
            except Exception as e:
                raise CandidateProcessingError(f"warp failed: {e}", stage="warp") from e

            height, width = warped.shape[:2]

        return ScannedDocument(
            id=self.id_generator(),
            image_data=data,
            confidence=candidate.confidence,
            corners=candidate.quad,
            width=width,
            height=height,
            metadata={"rotated": rotated}
        )


def scan_documents(image: np.ndarray, config: Optional[ProcessingConfig] = None) -> List[ScannedDocument]:
    """Scan with a default OpenCV-backed scanner."""
    return DocumentScanner(config=config).scan(image)
