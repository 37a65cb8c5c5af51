"""
Error taxonomy of the document scanner.

Top-level errors (LoadError, BackendUnavailable, ScanCancelled, ScanTimeout)
fail a whole scan. CandidateProcessingError is raised for one candidate and
is handled inside the scan loop. An empty result is not an error.
"""


class ScanError(Exception):
    """Base class for every error raised by the scanner."""


class LoadError(ScanError):
    """Input image is missing, empty or cannot be decoded."""


class BackendUnavailable(ScanError):
    """The image-processing backend cannot be used."""


class ValidationError(ScanError, ValueError):
    """Malformed geometric input, e.g. too few corner points."""


class CandidateProcessingError(ScanError):
    """Normalizing, scoring or warping a single candidate failed."""

    def __init__(self, message: str, stage: str = "unknown"):
        super().__init__(message)
        self.stage = stage


class ScanCancelled(ScanError):
    """The caller's cancel event was set while scanning."""


class ScanTimeout(ScanError):
    """The scan ran past its deadline."""
