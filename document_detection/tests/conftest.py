"""
Synthetic images shared by the document detection tests.
"""

import numpy as np
import pytest

from document_detection import CounterIdGenerator, DocumentScanner, ProcessingConfig


def paper_on_table(shape, rects):
    """Black image with white filled rectangles given as (left, top, right, bottom)."""
    image = np.zeros(shape + (3,), dtype=np.uint8)
    for left, top, right, bottom in rects:
        image[top:bottom, left:right] = 255
    return image


@pytest.fixture
def config():
    return ProcessingConfig()


@pytest.fixture
def scanner(config):
    return DocumentScanner(config=config, id_generator=CounterIdGenerator())


@pytest.fixture
def single_document_image():
    """1000x1000, one page covering 150..850 on both axes."""
    return paper_on_table((1000, 1000), [(150, 150, 850, 850)])


@pytest.fixture
def two_document_image():
    """1000x1000, two pages stacked vertically."""
    return paper_on_table((1000, 1000), [
        (320, 60, 680, 440),
        (250, 560, 750, 940),
    ])


@pytest.fixture
def sideways_document_image():
    """1200 wide, 600 tall, a long page lying across the middle."""
    return paper_on_table((600, 1200), [(100, 190, 1100, 410)])


@pytest.fixture
def blank_image():
    return np.zeros((1000, 1000, 3), dtype=np.uint8)


@pytest.fixture
def gradient_image():
    """Smooth horizontal gradient with faint noise, no edges worth detecting."""
    rng = np.random.default_rng(0)
    ramp = np.linspace(0, 255, 1000, dtype=np.float64)
    image = np.tile(ramp, (1000, 1))
    image = image + rng.normal(0, 1.5, image.shape)
    image = np.clip(image, 0, 255).astype(np.uint8)
    return np.dstack([image, image, image])
