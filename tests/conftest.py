"""
Pytest configuration and shared fixtures for image processor tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest

from IP_Libs.CollectionStoreLib import ImageCollection
from IP_Libs.ImageEditingLib import Pixel, PixelImage


def make_image(rows):
    """
    Build a PixelImage from nested lists of (r, g, b) tuples.

    Args:
        rows: List of rows, each a list of (r, g, b) or (r, g, b, max_value) tuples

    Returns:
        PixelImage with max value 255 unless given per pixel
    """
    return PixelImage([[Pixel(*channels) for channels in row] for row in rows])


@pytest.fixture
def collection():
    """Provide an empty image collection."""
    return ImageCollection()


@pytest.fixture
def gradient_image():
    """
    Provide a 3x4 image whose pixels are all distinct.

    Pixel (i, j) = (10*i + j, 20*i + j, 30*i + j).
    """
    return make_image([
        [(10 * i + j, 20 * i + j, 30 * i + j) for j in range(4)]
        for i in range(3)
    ])


@pytest.fixture
def sample_rgb_colors():
    """
    Provide a list of sample RGB color tuples for testing.
    """
    return [
        (255, 0, 0),      # Red
        (0, 255, 0),      # Green
        (0, 0, 255),      # Blue
        (255, 255, 255),  # White
        (0, 0, 0),        # Black
        (128, 128, 128),  # Gray
    ]
