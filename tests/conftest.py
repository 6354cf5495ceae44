"""Shared fixtures for overlay engine tests."""

import numpy as np
import pytest
from PIL import Image

from leaflet_overlay.config import EngineConfig
from leaflet_overlay.fonts import FontRegistry

BASE_GRAY = (100, 100, 100, 255)


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def leaflet():
    """Canonical-size 1920x1080 opaque gray leaflet."""
    return Image.new("RGBA", (1920, 1080), BASE_GRAY)


@pytest.fixture
def small_canvas():
    return Image.new("RGBA", (200, 100), (10, 200, 10, 255))


@pytest.fixture
def logo_on_white():
    """400x100 white logo with a solid black 100x50 mark in the middle."""
    img = Image.new("RGB", (400, 100), (255, 255, 255))
    img.paste((0, 0, 0), (150, 25, 250, 75))
    return img


@pytest.fixture
def empty_fonts(tmp_path):
    """Initialized registry with no font files; every lookup uses Pillow's default."""
    return FontRegistry().initialize(fonts_dir=str(tmp_path), include_system=False)


def as_array(image):
    return np.asarray(image.convert("RGBA")).astype(np.int32)
