"""
Image Loader
============

Decodes the source image file into an RGB raster.

Design Rules:
    - This is the ONLY place in the codebase that decodes images
    - Always returns (H, W, 3) uint8 in RGB channel order
    - Alpha channels are dropped, grayscale is expanded to RGB
    - Fails fast: any decode problem is an ImageDecodeError
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from pixel_brush.errors import ImageDecodeError


logger = logging.getLogger(__name__)


def load_raster(path: Union[str, Path]) -> np.ndarray:
    """
    Load an image file as an RGB raster.

    Args:
        path: Path to any image format OpenCV can decode

    Returns:
        RGB image as np.ndarray (H, W, 3), dtype=uint8

    Raises:
        ImageDecodeError: If the file is missing or cannot be decoded
    """
    path = Path(path)
    if not path.is_file():
        raise ImageDecodeError(f"Image file not found: {path}")

    # imread does not handle non-ASCII paths on every platform
    data = np.fromfile(str(path), dtype=np.uint8)
    image = cv2.imdecode(data, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageDecodeError(f"Failed to decode image: {path}")

    return to_rgb(image, source=str(path))


def to_rgb(image: np.ndarray, source: str = "<array>") -> np.ndarray:
    """
    Normalize a decoded OpenCV image to RGB uint8.

    Raises:
        ImageDecodeError: On unsupported shape or dtype
    """
    if image.dtype != np.uint8:
        raise ImageDecodeError(
            f"Unsupported image depth for {source}: {image.dtype} (expected uint8)"
        )

    if image.ndim == 2:
        rgb = cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    elif image.ndim == 3 and image.shape[2] == 3:
        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    elif image.ndim == 3 and image.shape[2] == 4:
        rgb = cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)
    else:
        raise ImageDecodeError(f"Invalid image shape for {source}: {image.shape}")

    height, width = rgb.shape[:2]
    logger.info(f"Loaded image {source}: {width}x{height}")
    return rgb
