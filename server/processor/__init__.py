import base64
import logging
from typing import Dict, List

from document_detection import DocumentScanner, ScannedDocument

logger = logging.getLogger(__name__)


def serialize_document(document: ScannedDocument) -> Dict[str, object]:
    item = document.to_dict()
    item["image"] = base64.b64encode(document.image_data).decode("ascii")
    return item


def process_upload(filename: str, data: bytes, scanner: DocumentScanner) -> Dict[str, object]:
    """
    Scan one uploaded file.

    Raises:
        LoadError: the upload is not a decodable image
    """
    documents = scanner.scan_bytes(data)
    logger.info(f"{filename}: {len(documents)} document(s)")

    return {
        "filename": filename,
        "documents": [serialize_document(d) for d in documents]
    }


def process_uploads(files: List, scanner: DocumentScanner) -> List[Dict[str, object]]:
    """Scan werkzeug FileStorage uploads in the order they were sent."""
    return [process_upload(f.filename, f.read(), scanner) for f in files]
