"""
Pytest configuration and shared fixtures for the photo mosaic editor tests.

This module provides shared test fixtures used across multiple test modules.
"""

import pytest
from PIL import Image

from PM_Libs.ImageEditingLib.image_models import PixelBuffer


@pytest.fixture
def temp_image_dir(tmp_path):
    """
    Provide a temporary directory for image files.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to a temporary directory
    """
    return tmp_path


@pytest.fixture
def gradient_buffer():
    """
    Provide a 4x3 buffer where every pixel is distinct.

    Returns:
        PixelBuffer with red varying by column, green by row
    """
    pixels = []
    for y in range(3):
        for x in range(4):
            pixels.append((x / 3.0, y / 2.0, 0.25, 1.0))
    return PixelBuffer.from_pixels(4, 3, pixels)


@pytest.fixture
def sample_tile_files(tmp_path):
    """
    Write three small solid-color PNG files of different sizes.

    Returns:
        List of Paths in red, green, blue order
    """
    specs = [
        ("red.png", (80, 60), (255, 0, 0)),
        ("green.png", (20, 20), (0, 255, 0)),
        ("blue.png", (33, 90), (0, 0, 255)),
    ]
    paths = []
    for name, size, color in specs:
        path = tmp_path / name
        Image.new("RGB", size, color).save(path)
        paths.append(path)
    return paths
