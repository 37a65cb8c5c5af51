#!/usr/bin/env python3
"""
CLI for the document scanner.

Usage:
    python -m document_detection -i photo.jpg
    python -m document_detection -i photo.jpg -o out/ --preview preview.png
"""

import argparse
import logging
import sys
from pathlib import Path

import cv2

from .config import ProcessingConfig
from .errors import BackendUnavailable, LoadError, ScanError
from .scanner import DocumentScanner
from .visualizer import DocumentVisualizer


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Detect and rectify documents in a photo',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:

  # Scan a photo (writes temp/photo_doc1.jpg, temp/photo_doc2.jpg, ...)
  python -m document_detection -i photo.jpg

  # Choose the output folder and save an annotated preview
  python -m document_detection -i photo.jpg -o scans --preview preview.png

Defaults can also be set with DOCSCAN_* environment variables or a .env file,
e.g. DOCSCAN_PROCESSING_SIZE=1000.
        """
    )

    parser.add_argument('-i', '--input', required=True, help='Input image')
    parser.add_argument('-o', '--output', default='temp', help='Output folder (default: temp/)')
    parser.add_argument('--preview', help='Save an annotated preview image to this path')
    parser.add_argument('--processing-size', type=int, help='Longest side of the working image (default: 800)')
    parser.add_argument('--confidence-threshold', type=int, help='Keep documents scoring above this (default: 40)')
    parser.add_argument('--iou-threshold', type=float, help='Overlap at which duplicates are removed (default: 0.5)')
    parser.add_argument('--timeout', type=float, help='Give up after this many seconds')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    return parser.parse_args(argv)


def build_config(args) -> ProcessingConfig:
    config = ProcessingConfig.from_env()

    overrides = {}
    if args.processing_size is not None:
        overrides['processing_size'] = args.processing_size
    if args.confidence_threshold is not None:
        overrides['confidence_threshold'] = args.confidence_threshold
    if args.iou_threshold is not None:
        overrides['iou_threshold'] = args.iou_threshold
    if args.timeout is not None:
        overrides['timeout_seconds'] = args.timeout

    return config.replace(**overrides) if overrides else config


def main(argv=None) -> int:
    """Main CLI function"""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s"
    )

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}")
        return 1

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: Invalid configuration: {e}")
        return 1

    try:
        scanner = DocumentScanner(config=config)
        print(f"Scanning: {input_path.name}")
        documents = scanner.scan_file(input_path)
    except (LoadError, BackendUnavailable) as e:
        print(f"Error: {e}")
        return 1
    except ScanError as e:
        print(f"Error while scanning: {e}")
        return 1

    if not documents:
        print("✗ No document found")
        return 0

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    for rank, document in enumerate(documents, start=1):
        output_path = output_dir / f"{input_path.stem}_doc{rank}{config.output_format}"
        output_path.write_bytes(document.image_data)

        corners = ", ".join(f"({x:.0f}, {y:.0f})" for x, y in document.corners)
        print(f"✓ #{rank} {document.id} confidence={document.confidence} corners=[{corners}] -> {output_path}")

    if args.preview:
        image = cv2.imread(str(input_path))
        if any(d.metadata.get("rotated") for d in documents):
            image = scanner.backend.rotate_90_clockwise(image)

        preview = DocumentVisualizer().visualize(image, documents)
        cv2.imwrite(args.preview, preview)
        print(f"✓ Preview saved: {args.preview}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
