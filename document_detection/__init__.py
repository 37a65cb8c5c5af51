"""
Document Detection Module

Finds every document in a photo, scores and de-duplicates the detections,
and returns perspective-corrected crops in reading order.
"""

from .backend import OpenCVBackend, VisionBackend, create_backend
from .config import ProcessingConfig, get_config, set_config
from .document import ScannedDocument
from .errors import (
    BackendUnavailable,
    CandidateProcessingError,
    LoadError,
    ScanCancelled,
    ScanError,
    ScanTimeout,
    ValidationError,
)
from .geometry import bounding_box_iou, extreme_corners, normalize_corners
from .ids import CounterIdGenerator, UuidIdGenerator
from .scanner import DocumentScanner, scan_documents
from .visualizer import DocumentVisualizer

__all__ = [
    'DocumentScanner', 'DocumentVisualizer', 'ScannedDocument', 'ProcessingConfig',
    'VisionBackend', 'OpenCVBackend', 'create_backend', 'get_config', 'set_config',
    'scan_documents', 'extreme_corners', 'normalize_corners', 'bounding_box_iou',
    'CounterIdGenerator', 'UuidIdGenerator',
    'ScanError', 'LoadError', 'BackendUnavailable', 'ValidationError',
    'CandidateProcessingError', 'ScanCancelled', 'ScanTimeout',
]
