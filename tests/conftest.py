"""
Test configuration and fixtures for palette finder tests.
"""
import pytest

from palette_finder.services.display import HeadlessViewer
from palette_finder.settings import Settings
from palette_finder.utils.metrics import reset_metrics

from generate_test_images import CELL_W, CELL_H


@pytest.fixture(autouse=True)
def reset_run_metrics():
    """Reset metrics before each test."""
    reset_metrics()


@pytest.fixture
def viewer():
    """Viewer that opens no windows."""
    return HeadlessViewer()


@pytest.fixture
def swatch_settings():
    """Settings matching the synthetic tiled swatch images."""
    return Settings(
        n_clusters=6,
        resize=120,
        color_w=CELL_W,
        color_h=CELL_H,
        threshold=0.9,
        vertical=True,
        reverse=False
    )
