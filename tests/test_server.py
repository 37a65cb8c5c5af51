import base64
import io

import cv2
import numpy as np
import pytest

from document_detection import CounterIdGenerator, DocumentScanner, ProcessingConfig
from server import create_app


@pytest.fixture
def client():
    scanner = DocumentScanner(config=ProcessingConfig(), id_generator=CounterIdGenerator())
    app = create_app(scanner)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def photo_png():
    image = np.zeros((1000, 1000, 3), dtype=np.uint8)
    image[150:850, 150:850] = 255
    ok, buffer = cv2.imencode(".png", image)
    assert ok
    return buffer.tobytes()


class TestServer:
    def test_is_available(self, client):
        response = client.get("/is-available")
        assert response.status_code == 200
        assert response.get_json() == {"isAvailable": True}

    def test_scan(self, client, photo_png):
        response = client.post(
            "/scan",
            data={"file": (io.BytesIO(photo_png), "photo.png")},
            content_type="multipart/form-data"
        )

        assert response.status_code == 200
        result = response.get_json()
        assert len(result) == 1
        assert result[0]["filename"] == "photo.png"

        documents = result[0]["documents"]
        assert len(documents) == 1
        assert documents[0]["id"] == "doc-1"
        assert documents[0]["confidence"] > 80
        assert len(documents[0]["corners"]) == 4

        image = cv2.imdecode(np.frombuffer(base64.b64decode(documents[0]["image"]), np.uint8), cv2.IMREAD_COLOR)
        assert image.shape[:2] == (documents[0]["height"], documents[0]["width"])

    def test_scan_multiple_files(self, client, photo_png):
        response = client.post(
            "/scan",
            data={"file": [
                (io.BytesIO(photo_png), "a.png"),
                (io.BytesIO(photo_png), "b.png"),
            ]},
            content_type="multipart/form-data"
        )

        assert response.status_code == 200
        assert [item["filename"] for item in response.get_json()] == ["a.png", "b.png"]

    def test_scan_junk(self, client):
        response = client.post(
            "/scan",
            data={"file": (io.BytesIO(b"not an image"), "junk.jpg")},
            content_type="multipart/form-data"
        )
        assert response.status_code == 400
        assert "message" in response.get_json()

    def test_scan_without_files(self, client):
        response = client.post("/scan", data={}, content_type="multipart/form-data")
        assert response.status_code == 400
        assert response.get_json() == {"message": "No files"}
