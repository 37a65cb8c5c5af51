import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS
from flasgger import Swagger, swag_from

from document_detection import DocumentScanner, LoadError

from server.processor import process_uploads

logger = logging.getLogger(__name__)

SWAGGER_FOLDER = os.path.join(os.path.dirname(os.path.abspath(__file__)), "swagger")

# Set the maximum file size to 50MB
MEGABYTE = (2 ** 10) ** 2


def create_app(scanner: DocumentScanner = None) -> Flask:
    """
    Build the HTTP app.

    Args:
        scanner: Scanner used by /scan; one with the default config is created when omitted
    """
    app = Flask(__name__)

    # Enable CORS for all routes
    CORS(app)

    app.config['MAX_CONTENT_LENGTH'] = 50 * MEGABYTE
    app.config['MAX_FORM_MEMORY_SIZE'] = 50 * MEGABYTE

    # Setup Swagger
    swagger_config = {
        "headers": [],
        "specs_route": "/docs/",
        "static_url_path": "/flasgger_static",
        "specs": [
            {
                "endpoint": 'apispec_1',
                "route": '/docs-json',
                "rule_filter": lambda rule: True,  # all in
                "model_filter": lambda tag: True,  # all in
            }
        ],
    }
    Swagger(app, config=swagger_config, merge=True)

    if scanner is None:
        scanner = DocumentScanner()
    app.extensions["document_scanner"] = scanner

    @app.route('/is-available', methods=['GET'])
    @swag_from(os.path.join(SWAGGER_FOLDER, "is-available.yml"))
    def is_available():
        return jsonify(isAvailable=True), 200

    @app.route('/scan', methods=['POST'])
    @swag_from(os.path.join(SWAGGER_FOLDER, "scan.yml"))
    def scan():
        files = request.files.getlist('file')

        if len(files) == 0:
            return jsonify(message="No files"), 400

        try:
            result = process_uploads(files, scanner)
        except LoadError as e:
            logger.warning(f"Rejected upload: {e}")
            return jsonify(message=str(e)), 400

        return jsonify(result), 200

    return app
