"""
Palette Finder Pipeline
Main orchestration of the per-image palette search and the batch run.
"""
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from palette_finder.errors import ImageDecodeError
from palette_finder.services.annotate import annotate
from palette_finder.services.display import Viewer
from palette_finder.services.imaging import (
    read_image, list_images, smooth, correlate, get_image_dimensions
)
from palette_finder.services.palette.extraction import Palette, extract_palette
from palette_finder.services.palette.matching import Detection, locate
from palette_finder.services.palette.swatches import (
    Swatch, synthesize_for_settings, settings_swatch_dimensions
)
from palette_finder.settings import Settings
from palette_finder.utils.ids import generate_run_id
from palette_finder.utils.logging import get_logger
from palette_finder.utils.metrics import get_metrics


@dataclass
class PaletteSearchResult:
    """Everything one image pass produced."""
    palette: Palette
    swatch: Swatch
    surface: Optional[np.ndarray]
    detections: List[Detection]

    @property
    def found(self) -> bool:
        return len(self.detections) > 0


def process_image(image_bgr: np.ndarray, settings: Settings, seed: int = None,
                  run_id: str = None) -> PaletteSearchResult:
    """
    Search one decoded image for its own palette swatch.

    Args:
        image_bgr: Decoded image in BGR format
        settings: Run settings
        seed: Random state for clustering
        run_id: Id attached to log lines (generated if omitted)

    Returns:
        PaletteSearchResult; ``found`` is False when nothing clears the threshold
    """
    logger = get_logger()
    if run_id is None:
        run_id = generate_run_id()

    with logger.contextualize(run_id=run_id):
        return _search(image_bgr, settings, seed)


def _search(image_bgr: np.ndarray, settings: Settings, seed: int = None) -> PaletteSearchResult:
    logger = get_logger()
    metrics = get_metrics()

    width, height = get_image_dimensions(image_bgr)
    logger.debug(f"Processing {width}×{height} image")

    with metrics.timed("smoothing"):
        smoothed = smooth(image_bgr)

    with metrics.timed("extraction"):
        palette = extract_palette(smoothed, settings, seed)

    with metrics.timed("synthesis"):
        swatch = synthesize_for_settings(palette.colors, settings)

    swatch_w, swatch_h = swatch.dims
    surface = None
    detections: List[Detection] = []

    if swatch_w > width or swatch_h > height:
        logger.warning(f"Swatch {swatch_w}×{swatch_h} does not fit inside {width}×{height} image")
    else:
        with metrics.timed("correlation"):
            surface = correlate(smoothed, swatch.image)
        with metrics.timed("location"):
            detections = locate(surface, settings.threshold, swatch.dims,
                                settings.vertical, settings.reverse)

    result = PaletteSearchResult(palette=palette, swatch=swatch,
                                 surface=surface, detections=detections)

    if result.found:
        metrics.increment_found_count()
        logger.info(f"Found {len(detections)} palette(s)",
                    extra={"boxes": [d.box for d in detections]})
    else:
        metrics.increment_missing_count()
        logger.info("Palette not found!")

    return result


def run(settings: Settings, viewer: Viewer, seed: int = None) -> int:
    """
    Process every image under ``settings.path``, one at a time.

    Returns:
        Process exit code: 1 as soon as an input cannot be decoded, else 0
    """
    logger = get_logger()
    metrics = get_metrics()
    expected_dims = settings_swatch_dimensions(settings)

    try:
        try:
            paths = list_images(settings.path)
        except ImageDecodeError as e:
            metrics.increment_decode_failure_count()
            logger.error(str(e))
            return 1

        for path in paths:
            run_id = generate_run_id()
            with logger.contextualize(run_id=run_id):
                logger.info(str(path))

                try:
                    image = read_image(str(path))
                except ImageDecodeError as e:
                    metrics.increment_decode_failure_count()
                    logger.error(str(e))
                    return 1

                metrics.increment_image_count()
                result = process_image(image, settings, seed, run_id)

                viewer.show_swatch(result.swatch, expected_dims)
                viewer.show_result(str(path), annotate(image, result.detections),
                                   settings.win_w, settings.win_h)
                viewer.wait()
    finally:
        viewer.close()
        logger.info("Run summary", extra=get_metrics().get_summary())

    return 0
