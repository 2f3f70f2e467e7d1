"""
Palette Finder Annotation
Draws detection rectangles and labels onto the source image.
"""
from typing import Sequence

import cv2
import numpy as np

from palette_finder.services.palette.matching import Detection

BOX_COLOR = (0, 0, 255)     # BGR red
LABEL_COLOR = (255, 0, 0)   # BGR blue
BOX_THICKNESS = 2
LABEL_SCALE = 2
LABEL_OFFSET_Y = 70


def annotate(image_bgr: np.ndarray, detections: Sequence[Detection]) -> np.ndarray:
    """
    Draw every detection onto a copy of the image.

    Args:
        image_bgr: Source image in BGR format
        detections: Located swatch occurrences

    Returns:
        Annotated copy; the input is left untouched
    """
    canvas = image_bgr.copy()

    for detection in detections:
        x1, y1, x2, y2 = detection.box
        cv2.rectangle(canvas, (x1, y1), (x2, y2), BOX_COLOR, BOX_THICKNESS)
        cv2.putText(
            canvas,
            detection.label,
            (x1, y2 + LABEL_OFFSET_Y),
            cv2.FONT_HERSHEY_SIMPLEX,
            LABEL_SCALE,
            LABEL_COLOR
        )

    return canvas
