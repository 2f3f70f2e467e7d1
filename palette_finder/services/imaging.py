"""
Palette Finder Imaging Utilities
Image decoding, smoothing, resampling and template correlation.
"""
from pathlib import Path
from typing import List

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from palette_finder.config import config
from palette_finder.errors import ImageDecodeError


def read_image(path: str) -> np.ndarray:
    """
    Decode an image file to a BGR numpy array.

    Args:
        path: Image file path

    Returns:
        numpy array in BGR format (OpenCV standard), uint8

    Raises:
        ImageDecodeError: If the file cannot be opened or decoded
    """
    try:
        with Image.open(path) as pil_image:
            # Honor camera orientation like cv2.imread does
            pil_image = ImageOps.exif_transpose(pil_image)
            # Convert to RGB if necessary
            if pil_image.mode != 'RGB':
                pil_image = pil_image.convert('RGB')
            rgb_array = np.array(pil_image)
    except (OSError, UnidentifiedImageError, ValueError) as e:
        raise ImageDecodeError(str(path), str(e))

    if rgb_array.size == 0:
        raise ImageDecodeError(str(path), "empty image")

    # Convert RGB to BGR for OpenCV
    return cv2.cvtColor(rgb_array, cv2.COLOR_RGB2BGR)


def list_images(path: str) -> List[Path]:
    """
    Resolve the source path into the files to process.

    A file yields itself; a directory yields its regular files in sorted order.

    Raises:
        ImageDecodeError: If the path does not exist
    """
    source = Path(path)
    if source.is_file():
        return [source]
    if source.is_dir():
        return sorted(entry for entry in source.iterdir() if entry.is_file())
    raise ImageDecodeError(str(path), "no such file or directory")


def smooth(img_bgr: np.ndarray, kernel: int = None) -> np.ndarray:
    """
    Gaussian-smooth an image; sigma is derived from the kernel size.

    Args:
        img_bgr: Input image in BGR format
        kernel: Odd kernel size (default from config)
    """
    if kernel is None:
        kernel = config.BLUR_KERNEL
    if not config.validate_blur_kernel(kernel):
        raise ValueError(f"Invalid blur kernel: {kernel}")

    return cv2.GaussianBlur(img_bgr, (kernel, kernel), 0, 0, cv2.BORDER_DEFAULT)


def downsample(img_bgr: np.ndarray, size: int) -> np.ndarray:
    """Resize an image to a ``size × size`` square."""
    return cv2.resize(img_bgr, (size, size))


def to_samples(img_bgr: np.ndarray) -> np.ndarray:
    """Flatten an image into (N, 3) float32 pixel rows."""
    return img_bgr.reshape(-1, 3).astype(np.float32)


def correlate(source_bgr: np.ndarray, template_bgr: np.ndarray) -> np.ndarray:
    """
    Normalized correlation coefficient of a template over a source image.

    Returns:
        float32 score surface of shape (H - h + 1, W - w + 1)

    Raises:
        ValueError: If the template does not fit inside the source
    """
    src_h, src_w = source_bgr.shape[:2]
    tpl_h, tpl_w = template_bgr.shape[:2]
    if tpl_h > src_h or tpl_w > src_w:
        raise ValueError(
            f"Template larger than source: template={tpl_w}×{tpl_h}, source={src_w}×{src_h}"
        )

    return cv2.matchTemplate(source_bgr, template_bgr, cv2.TM_CCOEFF_NORMED)


def get_image_dimensions(img_bgr: np.ndarray):
    """
    Get image width and height.

    Returns:
        Tuple of (width, height)
    """
    height, width = img_bgr.shape[:2]
    return width, height
