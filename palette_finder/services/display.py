"""
Palette Finder Display
Interactive presentation of the swatch and the annotated result.

Each image pass ends at ``wait()``: the HighGUI viewer blocks until a key is
pressed, with no timeout. The headless viewer records what it was given and
returns immediately.
"""
from typing import List, Tuple

import cv2
import numpy as np

from palette_finder.config import config
from palette_finder.services.palette.swatches import Swatch

SWATCH_WINDOW = "palette"


class Viewer:
    """Interface for presenting one image pass."""

    def show_swatch(self, swatch: Swatch, dims: Tuple[int, int]) -> None:
        raise NotImplementedError

    def show_result(self, name: str, image: np.ndarray, win_w: int, win_h: int) -> None:
        raise NotImplementedError

    def wait(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class HighGuiViewer(Viewer):
    """OpenCV window viewer."""

    def show_swatch(self, swatch: Swatch, dims: Tuple[int, int]) -> None:
        cv2.namedWindow(SWATCH_WINDOW, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(SWATCH_WINDOW, dims[0], dims[1])
        cv2.imshow(SWATCH_WINDOW, swatch.image)

    def show_result(self, name: str, image: np.ndarray, win_w: int, win_h: int) -> None:
        cv2.namedWindow(name, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(name, win_w, win_h)
        cv2.imshow(name, image)

    def wait(self) -> None:
        # Any key advances to the next image
        cv2.waitKey(0)
        cv2.destroyAllWindows()

    def close(self) -> None:
        cv2.destroyAllWindows()


class HeadlessViewer(Viewer):
    """Viewer that keeps what it was shown instead of opening windows."""

    def __init__(self):
        self.swatches: List[Swatch] = []
        self.results: List[Tuple[str, np.ndarray]] = []
        self.waits = 0

    def show_swatch(self, swatch: Swatch, dims: Tuple[int, int]) -> None:
        self.swatches.append(swatch)

    def show_result(self, name: str, image: np.ndarray, win_w: int, win_h: int) -> None:
        self.results.append((name, image))

    def wait(self) -> None:
        self.waits += 1


def get_viewer() -> Viewer:
    """Pick the viewer for this process."""
    if config.HEADLESS:
        return HeadlessViewer()
    return HighGuiViewer()
