"""
Palette extraction for product package images.

Quantizes a downsampled, smoothed image into ``n_clusters`` colors, orders
the cluster centers and drops the brightest one as background.

Ordering note: the default ``"columns"`` mode sorts every channel column
independently, so row ``i`` holds the ``i``-th smallest value of each channel
and need not be a color any single cluster produced. It approximates a dark
to light gradient. ``"luminance"`` keeps each center intact and sorts whole
rows by luma instead; the two modes only agree when the centers are already
co-monotonic across channels.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from sklearn.cluster import KMeans

from palette_finder.config import config
from palette_finder.services.imaging import downsample, to_samples
from palette_finder.settings import Settings
from palette_finder.utils.logging import get_logger

# Rec.601 luma weights in BGR order
_LUMA_BGR = np.array([0.114, 0.587, 0.299], dtype=np.float64)


@dataclass(frozen=True)
class Palette:
    """Colors to render plus the clustering output they came from."""
    colors: np.ndarray         # (n_clusters - 1, 3) uint8, render order
    centers: np.ndarray        # (n_clusters, 3) float32, ordered, background included
    cluster_sizes: np.ndarray  # pixel count per label


def quantize(samples: np.ndarray, k: int, seed: int = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cluster pixel samples into ``k`` colors.

    Args:
        samples: (N, 3) float32 pixel rows
        k: Number of clusters
        seed: Random state for deterministic clustering (default from config)

    Returns:
        Tuple of (labels (N,) int, centers (k, 3) float32)
    """
    if seed is None:
        seed = config.KMEANS_SEED

    kmeans = KMeans(
        n_clusters=k,
        n_init=config.KMEANS_ATTEMPTS,
        max_iter=config.KMEANS_MAX_ITER,
        random_state=seed
    )
    labels = kmeans.fit_predict(samples)
    centers = kmeans.cluster_centers_.astype(np.float32)

    return labels, centers


def order_centers(centers: np.ndarray, mode: str = "columns") -> np.ndarray:
    """
    Order cluster centers dark to light.

    Args:
        centers: (k, 3) cluster centers
        mode: "columns" sorts each channel independently ascending,
              "luminance" sorts whole rows by luma

    Returns:
        Ordered (k, 3) array
    """
    if mode == "columns":
        return np.sort(centers, axis=0)
    if mode == "luminance":
        luma = centers.astype(np.float64) @ _LUMA_BGR
        return centers[np.argsort(luma, kind="stable")]
    raise ValueError(f"Unknown ordering mode: {mode}")


def drop_background(ordered: np.ndarray) -> np.ndarray:
    """Drop the last (brightest) row, which is treated as background."""
    return ordered[:-1]


def cluster_sizes(labels: np.ndarray) -> np.ndarray:
    """Count pixels per label; labels missing below the maximum count as zero."""
    return np.bincount(np.asarray(labels).ravel())


def to_color_u8(centers: np.ndarray) -> np.ndarray:
    """Round and saturate float centers to uint8 colors."""
    return np.clip(np.rint(centers), 0, 255).astype(np.uint8)


def extract_palette(smoothed_bgr: np.ndarray, settings: Settings, seed: int = None) -> Palette:
    """
    Derive the swatch colors of an already smoothed image.

    Args:
        smoothed_bgr: Smoothed image in BGR format
        settings: Run settings (cluster count, sample size, ordering)
        seed: Random state for clustering

    Returns:
        Palette with exactly ``settings.n_clusters - 1`` colors
    """
    logger = get_logger()

    samples = to_samples(downsample(smoothed_bgr, settings.resize))
    labels, centers = quantize(samples, settings.n_clusters, seed)

    ordered = order_centers(centers, settings.ordering)
    sizes = cluster_sizes(labels)
    colors = to_color_u8(drop_background(ordered))

    logger.debug(
        f"Clustered {len(samples)} samples into {settings.n_clusters} colors",
        extra={"cluster_sizes": sizes.tolist(), "ordering": settings.ordering}
    )

    return Palette(colors=colors, centers=ordered, cluster_sizes=sizes)
