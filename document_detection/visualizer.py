"""
Visualization of detected documents
"""

import cv2
import numpy as np
from typing import List, Optional, Sequence, Tuple

from .document import ScannedDocument


class DocumentVisualizer:
    """
    Draws detected documents onto the scanned image.

    Every document gets a frame, a transparent overlay and a label with its
    rank and confidence.
    """

    def __init__(
        self,
        border_color: Tuple[int, int, int] = (255, 100, 0),  # Blue in BGR
        border_thickness: int = 3,
        overlay_color: Tuple[int, int, int] = (255, 200, 100),  # Light blue in BGR
        overlay_alpha: float = 0.3,
        low_confidence_color: Tuple[int, int, int] = (0, 140, 255),  # Orange in BGR
        low_confidence_below: int = 70
    ):
        """
        Initialize the visualizer.

        Args:
            border_color: Frame color in BGR format
            border_thickness: Frame thickness in pixels
            overlay_color: Transparent overlay color in BGR format
            overlay_alpha: Overlay transparency (0.0 = transparent, 1.0 = opaque)
            low_confidence_color: Frame color for documents below low_confidence_below
            low_confidence_below: Confidence under which the alternative color is used
        """
        self.border_color = border_color
        self.border_thickness = border_thickness
        self.overlay_color = overlay_color
        self.overlay_alpha = overlay_alpha
        self.low_confidence_color = low_confidence_color
        self.low_confidence_below = low_confidence_below

    def _clip_line_to_image(self, p1: np.ndarray, p2: np.ndarray, img_shape: Tuple[int, int]) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        """
        Clip a line segment to image boundaries (Cohen-Sutherland).

        Returns:
            Tuple of clipped points, or (None, None) if the segment is outside
        """
        h, w = img_shape
        x1, y1 = float(p1[0]), float(p1[1])
        x2, y2 = float(p2[0]), float(p2[1])

        INSIDE, LEFT, RIGHT, BOTTOM, TOP = 0, 1, 2, 4, 8

        def outcode(x, y):
            code = INSIDE
            if x < 0: code |= LEFT
            elif x > w: code |= RIGHT
            if y < 0: code |= TOP
            elif y > h: code |= BOTTOM
            return code

        code1 = outcode(x1, y1)
        code2 = outcode(x2, y2)

        while True:
            if code1 == 0 and code2 == 0:
                return np.array([x1, y1]), np.array([x2, y2])

            if code1 & code2:
                return None, None

            code_out = code1 if code1 else code2

            if code_out & TOP:
                x = x1 + (x2 - x1) * (0 - y1) / (y2 - y1)
                y = 0
            elif code_out & BOTTOM:
                x = x1 + (x2 - x1) * (h - y1) / (y2 - y1)
                y = h
            elif code_out & RIGHT:
                y = y1 + (y2 - y1) * (w - x1) / (x2 - x1)
                x = w
            else:
                y = y1 + (y2 - y1) * (0 - x1) / (x2 - x1)
                x = 0

            if code_out == code1:
                x1, y1 = x, y
                code1 = outcode(x1, y1)
            else:
                x2, y2 = x, y
                code2 = outcode(x2, y2)

    def _draw_clipped_polygon(self, image: np.ndarray, corners: np.ndarray, color: Tuple[int, int, int], thickness: int):
        h, w = image.shape[:2]

        for i in range(len(corners)):
            p1 = corners[i]
            p2 = corners[(i + 1) % len(corners)]

            p1_clip, p2_clip = self._clip_line_to_image(p1, p2, (h, w))
            if p1_clip is not None and p2_clip is not None:
                cv2.line(
                    image,
                    tuple(int(v) for v in p1_clip),
                    tuple(int(v) for v in p2_clip),
                    color,
                    thickness
                )

        # Corner dots, TL larger so the ordering is visible
        for index, corner in enumerate(corners):
            if 0 <= corner[0] <= w and 0 <= corner[1] <= h:
                cv2.circle(
                    image,
                    (int(corner[0]), int(corner[1])),
                    radius=8 if index == 0 else 5,
                    color=color,
                    thickness=-1
                )

    def _draw_label(self, image: np.ndarray, text: str, origin: Tuple[int, int]):
        # White outline
        cv2.putText(image, text, origin, cv2.FONT_HERSHEY_SIMPLEX, 0.8, (255, 255, 255), 3, cv2.LINE_AA)
        # Black text
        cv2.putText(image, text, origin, cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 0, 0), 1, cv2.LINE_AA)

    def frame_color(self, confidence: int) -> Tuple[int, int, int]:
        if confidence < self.low_confidence_below:
            return self.low_confidence_color
        return self.border_color

    def visualize(
        self,
        image: np.ndarray,
        documents: Sequence[ScannedDocument],
        draw_border: bool = True,
        draw_overlay: bool = True,
        draw_labels: bool = True
    ) -> np.ndarray:
        """
        Draw detected documents on a copy of the image.

        Args:
            image: Image the documents were detected in (BGR or grayscale)
            documents: Scan results, in the order they should be numbered
            draw_border: Whether to draw frames
            draw_overlay: Whether to draw the transparent fill
            draw_labels: Whether to write '#rank confidence%' next to each top-left corner

        Returns:
            Annotated BGR image
        """
        if image is None:
            return image

        result = image.copy()
        if result.ndim == 2:
            result = cv2.cvtColor(result, cv2.COLOR_GRAY2BGR)
        elif result.shape[2] == 4:
            result = cv2.cvtColor(result, cv2.COLOR_BGRA2BGR)

        if not documents:
            return result

        if draw_overlay:
            overlay = result.copy()
            for document in documents:
                cv2.fillPoly(overlay, [document.corners.astype(np.int32)], self.overlay_color)
            result = cv2.addWeighted(
                overlay,
                self.overlay_alpha,
                result,
                1 - self.overlay_alpha,
                0
            )

        h, w = result.shape[:2]
        for rank, document in enumerate(documents, start=1):
            color = self.frame_color(document.confidence)
            if draw_border:
                self._draw_clipped_polygon(result, document.corners, color, self.border_thickness)

            if draw_labels:
                tl = document.top_left
                x = int(np.clip(tl[0] + 10, 0, max(0, w - 120)))
                y = int(np.clip(tl[1] + 30, 25, max(25, h - 5)))
                self._draw_label(result, f"#{rank} {document.confidence}%", (x, y))

        return result

    def create_side_by_side(
        self,
        original: np.ndarray,
        visualized: np.ndarray
    ) -> np.ndarray:
        """
        Join the original and the annotated image horizontally.
        """
        if original is None or visualized is None:
            return original if original is not None else visualized

        if original.ndim == 2:
            original = cv2.cvtColor(original, cv2.COLOR_GRAY2BGR)
        elif original.shape[2] == 4:
            original = cv2.cvtColor(original, cv2.COLOR_BGRA2BGR)

        if original.shape[0] != visualized.shape[0]:
            height = original.shape[0]
            width = int(visualized.shape[1] * height / visualized.shape[0])
            visualized = cv2.resize(visualized, (width, height))

        return np.hstack([original, visualized])


def decode_documents(documents: Sequence[ScannedDocument]) -> List[np.ndarray]:
    """Decode the image bytes of each document (for previews and tests)."""
    images = []
    for document in documents:
        buffer = np.frombuffer(document.image_data, dtype=np.uint8)
        images.append(cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED))
    return images
