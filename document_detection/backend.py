"""
Image-processing backend used by the scanner.

VisionBackend lists the primitives the pipeline needs; OpenCVBackend
implements them with OpenCV. The scanner only talks to this interface.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Tuple

import numpy as np

from common.bounds import Bounds
from .errors import BackendUnavailable, LoadError

logger = logging.getLogger(__name__)


class VisionBackend(ABC):
    """Primitive operations consumed by the scanning pipeline."""

    name = "abstract"

    @abstractmethod
    def is_ready(self) -> bool:
        ...

    @abstractmethod
    def to_grayscale(self, image: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def gaussian_blur(self, image: np.ndarray, kernel_size: int) -> np.ndarray:
        ...

    @abstractmethod
    def detect_edges(self, image: np.ndarray, low: float, high: float) -> np.ndarray:
        ...

    @abstractmethod
    def mean_std(self, image: np.ndarray) -> Tuple[float, float]:
        ...

    @abstractmethod
    def find_external_contours(self, edges: np.ndarray) -> List[np.ndarray]:
        ...

    @abstractmethod
    def contour_area(self, contour: np.ndarray) -> float:
        ...

    @abstractmethod
    def arc_length(self, contour: np.ndarray, closed: bool = True) -> float:
        ...

    @abstractmethod
    def approx_polygon(self, contour: np.ndarray, epsilon: float) -> np.ndarray:
        ...

    @abstractmethod
    def is_convex(self, polygon: np.ndarray) -> bool:
        ...

    @abstractmethod
    def bounding_rect(self, points: np.ndarray) -> Bounds:
        ...

    @abstractmethod
    def resize_area(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        ...

    @abstractmethod
    def rotate_90_clockwise(self, image: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def perspective_warp(
        self,
        image: np.ndarray,
        quad: np.ndarray,
        width: int,
        height: int,
        interpolation: str = "cubic"
    ) -> np.ndarray:
        ...

    @abstractmethod
    def encode(self, image: np.ndarray, extension: str = ".jpg", quality: float = 0.85) -> bytes:
        ...

    @abstractmethod
    def decode(self, data: bytes) -> np.ndarray:
        ...


class OpenCVBackend(VisionBackend):
    """
    VisionBackend over opencv-python.

    Raises BackendUnavailable on construction when cv2 cannot be imported.
    """

    name = "opencv"

    REQUIRED_FUNCTIONS = (
        "cvtColor", "GaussianBlur", "Canny", "meanStdDev", "findContours",
        "contourArea", "arcLength", "approxPolyDP", "isContourConvex",
        "boundingRect", "resize", "rotate", "getPerspectiveTransform",
        "warpPerspective", "imencode", "imdecode",
    )

    def __init__(self):
        try:
            import cv2
        except ImportError as exc:
            raise BackendUnavailable(f"OpenCV is not installed: {exc}") from exc

        self.cv2 = cv2
        self.interpolations = {
            "nearest": cv2.INTER_NEAREST,
            "linear": cv2.INTER_LINEAR,
            "cubic": cv2.INTER_CUBIC,
            "area": cv2.INTER_AREA,
            "lanczos": cv2.INTER_LANCZOS4,
        }

    def is_ready(self) -> bool:
        missing = [f for f in self.REQUIRED_FUNCTIONS if not hasattr(self.cv2, f)]
        if missing:
            logger.error(f"OpenCV build is missing functions: {', '.join(missing)}")
            return False
        return True

    def to_grayscale(self, image: np.ndarray) -> np.ndarray:
        cv2 = self.cv2

        if image.ndim == 2:
            return image.copy()
        if image.ndim == 3:
            channels = image.shape[2]
            if channels == 3:
                return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
            if channels == 4:
                return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
            if channels == 1:
                return image[:, :, 0].copy()

        raise ValueError(f"Unexpected image shape: {image.shape}")

    def gaussian_blur(self, image: np.ndarray, kernel_size: int) -> np.ndarray:
        return self.cv2.GaussianBlur(image, (kernel_size, kernel_size), 0)

    def detect_edges(self, image: np.ndarray, low: float, high: float) -> np.ndarray:
        return self.cv2.Canny(image, low, high)

    def mean_std(self, image: np.ndarray) -> Tuple[float, float]:
        mean, std = self.cv2.meanStdDev(image)
        return float(mean[0][0]), float(std[0][0])

    def find_external_contours(self, edges: np.ndarray) -> List[np.ndarray]:
        contours, _ = self.cv2.findContours(
            edges,
            self.cv2.RETR_EXTERNAL,
            self.cv2.CHAIN_APPROX_SIMPLE
        )
        return list(contours)

    def contour_area(self, contour: np.ndarray) -> float:
        return float(self.cv2.contourArea(contour))

    def arc_length(self, contour: np.ndarray, closed: bool = True) -> float:
        return float(self.cv2.arcLength(contour, closed))

    def approx_polygon(self, contour: np.ndarray, epsilon: float) -> np.ndarray:
        approx = self.cv2.approxPolyDP(contour, epsilon, True)
        return approx.reshape(-1, 2)

    def is_convex(self, polygon: np.ndarray) -> bool:
        return bool(self.cv2.isContourConvex(polygon.reshape(-1, 1, 2)))

    def bounding_rect(self, points: np.ndarray) -> Bounds:
        pts = np.asarray(points)
        if pts.dtype not in (np.int32, np.float32):
            pts = pts.astype(np.float32)
        x, y, w, h = self.cv2.boundingRect(pts.reshape(-1, 1, 2))
        return Bounds(x, y, w, h)

    def resize_area(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        return self.cv2.resize(image, (width, height), interpolation=self.cv2.INTER_AREA)

    def rotate_90_clockwise(self, image: np.ndarray) -> np.ndarray:
        return self.cv2.rotate(image, self.cv2.ROTATE_90_CLOCKWISE)

    def perspective_warp(
        self,
        image: np.ndarray,
        quad: np.ndarray,
        width: int,
        height: int,
        interpolation: str = "cubic"
    ) -> np.ndarray:
        cv2 = self.cv2

        src = np.asarray(quad, dtype=np.float32).reshape(4, 2)
        dst = np.array([
            [0, 0],
            [width, 0],
            [width, height],
            [0, height]
        ], dtype=np.float32)

        M = cv2.getPerspectiveTransform(src, dst)
        return cv2.warpPerspective(
            image,
            M,
            (width, height),
            flags=self.interpolations[interpolation],
            borderMode=cv2.BORDER_CONSTANT
        )

    def encode(self, image: np.ndarray, extension: str = ".jpg", quality: float = 0.85) -> bytes:
        cv2 = self.cv2

        ext = extension.lower()
        params = []
        if ext in (".jpg", ".jpeg"):
            params = [cv2.IMWRITE_JPEG_QUALITY, int(round(quality * 100))]
        elif ext == ".webp":
            params = [cv2.IMWRITE_WEBP_QUALITY, int(round(quality * 100))]

        ok, buffer = cv2.imencode(ext, image, params)
        if not ok:
            raise ValueError(f"Failed to encode image as {extension}")
        return buffer.tobytes()

    def decode(self, data: bytes) -> np.ndarray:
        if not data:
            raise LoadError("Image data is empty")

        buffer = np.frombuffer(data, dtype=np.uint8)
        image = self.cv2.imdecode(buffer, self.cv2.IMREAD_COLOR)
        if image is None:
            raise LoadError("Image data could not be decoded")
        return image


def create_backend() -> VisionBackend:
    """
    Construct the default backend and check it is usable.

    Raises:
        BackendUnavailable: OpenCV is missing or incomplete
    """
    backend = OpenCVBackend()
    if not backend.is_ready():
        raise BackendUnavailable(f"Backend '{backend.name}' is not ready")
    return backend
