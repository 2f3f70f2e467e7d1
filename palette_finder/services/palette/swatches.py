"""
Swatch Synthesis Module

Builds the reference swatch image (the "model") that is correlated against
the source photograph: one solid cell per palette color, concatenated
edge-to-edge along the stacking axis.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import cv2
import numpy as np
from palette_finder.settings import Settings
from palette_finder.utils.logging import get_logger


@dataclass(frozen=True)
class Swatch:
    """Synthesized swatch image and its geometry."""
    image: np.ndarray
    vertical: bool
    cell_width: int
    cell_height: int
    cell_count: int

    @property
    def dims(self) -> Tuple[int, int]:
        """Swatch size as (width, height)."""
        height, width = self.image.shape[:2]
        return width, height


def cell_shape(color_w: int, color_h: int, vertical: bool) -> Tuple[int, int]:
    """
    Size of one swatch cell as (width, height).

    Vertical swatches use ``color_w × color_h`` cells; horizontal swatches
    swap the two so each cell is ``color_h`` wide and ``color_w`` tall.
    """
    if vertical:
        return color_w, color_h
    return color_h, color_w


def swatch_dimensions(color_w: int, color_h: int, count: int, vertical: bool) -> Tuple[int, int]:
    """Predicted swatch size as (width, height) for ``count`` cells."""
    if vertical:
        return color_w, color_h * count
    return color_h * count, color_w


def settings_swatch_dimensions(settings: Settings) -> Tuple[int, int]:
    """Predicted swatch size for a run's settings."""
    return swatch_dimensions(settings.color_w, settings.color_h, settings.colors, settings.vertical)


def synthesize_swatch(colors: Sequence, color_w: int, color_h: int,
                      vertical: bool, reverse: bool) -> Swatch:
    """
    Render ordered colors into a swatch image.

    Args:
        colors: Ordered color triplets in the source image's channel order
        color_w: Configured cell width
        color_h: Configured cell height
        vertical: Stack cells top-to-bottom (else left-to-right)
        reverse: Reverse the cell order before stacking

    Returns:
        Swatch whose image is exactly ``swatch_dimensions(...)`` in size

    Raises:
        ValueError: If no colors are given
    """
    colors = np.asarray(colors)
    if colors.size == 0:
        raise ValueError("Empty color list provided")

    colors = np.clip(np.rint(colors.astype(np.float64)), 0, 255).astype(np.uint8).reshape(-1, 3)
    cell_w, cell_h = cell_shape(color_w, color_h, vertical)

    cells = [np.full((cell_h, cell_w, 3), color, dtype=np.uint8) for color in colors]
    if reverse:
        cells.reverse()

    model = cv2.vconcat(cells) if vertical else cv2.hconcat(cells)

    get_logger().debug(f"Synthesized {len(cells)}-cell swatch {model.shape[1]}×{model.shape[0]}, "
                       f"vertical={vertical}, reverse={reverse}")

    return Swatch(
        image=model,
        vertical=vertical,
        cell_width=cell_w,
        cell_height=cell_h,
        cell_count=len(cells)
    )


def synthesize_for_settings(colors: Sequence, settings: Settings) -> Swatch:
    """Render a swatch using a run's geometry and layout flags."""
    return synthesize_swatch(colors, settings.color_w, settings.color_h,
                             settings.vertical, settings.reverse)
