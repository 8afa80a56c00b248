"""Pytest configuration for docuclear tests.

Synthetic surfaces shared by the detection, warp and pipeline tests.
"""

import numpy as np
import pytest

from docuclear.services.surface import PixelSurface

# White page on a black table, as used by the end-to-end scenario
PHOTO_SIZE = (800, 1000)
PAGE_RECT = (100, 150, 700, 900)


def make_document_photo(width=PHOTO_SIZE[0], height=PHOTO_SIZE[1], rect=PAGE_RECT):
    """Black opaque surface with a white axis-aligned rectangle."""
    left, top, right, bottom = rect
    surface = PixelSurface.blank(width, height, fill=(0, 0, 0, 255))
    surface.pixels[top:bottom, left:right, :3] = 255
    return surface


def make_noise_surface(width, height, seed=0):
    """Opaque surface filled with reproducible random colors."""
    rng = np.random.default_rng(seed)
    rgb = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return PixelSurface.from_array(rgb)


@pytest.fixture
def document_photo():
    return make_document_photo()


@pytest.fixture
def uniform_surface():
    return PixelSurface.blank(300, 200, fill=(128, 128, 128, 255))


@pytest.fixture
def noise_surface():
    return make_noise_surface(64, 48)


@pytest.fixture
def photo_factory():
    return make_document_photo


@pytest.fixture
def noise_factory():
    return make_noise_surface
