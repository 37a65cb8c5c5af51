import numpy as np
import pytest

from document_detection import DocumentVisualizer, ScannedDocument


@pytest.fixture
def visualizer():
    return DocumentVisualizer()


def make_document(corners, confidence=90):
    return ScannedDocument(id="doc", image_data=b"", confidence=confidence, corners=corners)


class TestDocumentVisualizer:
    def test_draws_on_copy(self, visualizer, single_document_image):
        document = make_document([[150, 150], [850, 150], [850, 850], [150, 850]])
        before = single_document_image.copy()

        result = visualizer.visualize(single_document_image, [document])

        assert result.shape == single_document_image.shape
        assert np.array_equal(before, single_document_image)
        assert not np.array_equal(result, single_document_image)

    def test_grayscale_input_becomes_bgr(self, visualizer):
        gray = np.zeros((200, 300), dtype=np.uint8)
        document = make_document([[20, 20], [280, 20], [280, 180], [20, 180]])
        assert visualizer.visualize(gray, [document]).shape == (200, 300, 3)

    def test_no_documents(self, visualizer, blank_image):
        result = visualizer.visualize(blank_image, [])
        assert np.array_equal(result, blank_image)

    def test_corners_outside_image(self, visualizer, blank_image):
        document = make_document([[-100, -50], [1200, -20], [1100, 1300], [-80, 900]])
        result = visualizer.visualize(blank_image, [document])
        assert result.shape == blank_image.shape

    def test_low_confidence_color(self, visualizer):
        assert visualizer.frame_color(50) == visualizer.low_confidence_color
        assert visualizer.frame_color(95) == visualizer.border_color

    def test_clip_line(self, visualizer):
        p1, p2 = visualizer._clip_line_to_image(np.array([-50, 50]), np.array([150, 50]), (100, 100))
        assert p1.tolist() == [0, 50]
        assert p2.tolist() == [100, 50]

        assert visualizer._clip_line_to_image(np.array([-50, -50]), np.array([-10, -10]), (100, 100)) == (None, None)

    def test_side_by_side(self, visualizer, single_document_image):
        combined = visualizer.create_side_by_side(single_document_image, single_document_image)
        assert combined.shape == (1000, 2000, 3)
