"""
Match location on a correlation surface.

Correlation surfaces put a cluster of adjacent high scores around every true
swatch occurrence. Candidates above the threshold are walked in scan order
and a candidate only becomes a new detection when it sits more than ``gate``
pixels away from the last detection along the axis orthogonal to the
stacking direction.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from palette_finder.config import config

Point = Tuple[int, int]


@dataclass(frozen=True)
class Detection:
    """One located swatch occurrence in source-image pixels."""
    x: int
    y: int
    width: int
    height: int

    @property
    def position(self) -> Point:
        return self.x, self.y

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Corners as (x1, y1, x2, y2)."""
        return self.x, self.y, self.x + self.width, self.y + self.height

    @property
    def label(self) -> str:
        return f"Palette: {self.x + self.width}, {self.y + self.height}"


def find_candidates(surface: np.ndarray, threshold: float) -> List[Point]:
    """
    Collect every (x, y) whose score is at least ``threshold``.

    Returns:
        Candidates in row-major scan order (row, then column)
    """
    rows, cols = np.nonzero(np.asarray(surface) >= threshold)
    return [(int(col), int(row)) for row, col in zip(rows, cols)]


def deduplicate(candidates: Sequence[Point], vertical: bool, reverse: bool,
                gate: int = None, last_kept: Optional[int] = None) -> List[Point]:
    """
    Collapse adjacent candidates into one representative each.

    Args:
        candidates: (x, y) positions in scan order
        vertical: Swatch stacked top-to-bottom; compare x coordinates (else y)
        reverse: Walk candidates from last to first
        gate: Largest distance still treated as the same occurrence
        last_kept: Starting reference coordinate; unset means the first
                   candidate is always kept. 0 reproduces the legacy gate.

    Returns:
        Kept positions in processing order
    """
    if gate is None:
        gate = config.DUPLICATE_GATE_PX
    if not config.validate_gate(gate):
        raise ValueError(f"Invalid duplicate gate: {gate}")

    ordered = list(reversed(candidates)) if reverse else list(candidates)
    kept = []

    for x, y in ordered:
        coordinate = x if vertical else y
        if last_kept is None or abs(coordinate - last_kept) > gate:
            kept.append((x, y))
            last_kept = coordinate

    return kept


def locate(surface: np.ndarray, threshold: float, swatch_dims: Tuple[int, int],
           vertical: bool, reverse: bool, gate: int = None) -> List[Detection]:
    """
    Turn a correlation surface into de-duplicated detections.

    Args:
        surface: Score per swatch alignment, shape (H - h + 1, W - w + 1)
        threshold: Minimum score for a candidate
        swatch_dims: Swatch size as (width, height)
        vertical: Swatch stacking direction
        reverse: Walk candidates in reverse scan order

    Returns:
        Detections in processing order; empty when nothing clears the threshold
    """
    width, height = swatch_dims
    candidates = find_candidates(surface, threshold)
    kept = deduplicate(candidates, vertical, reverse, gate)

    return [Detection(x=x, y=y, width=width, height=height) for x, y in kept]
