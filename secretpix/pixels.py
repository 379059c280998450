# secretpix/pixels.py
"""
PixelBuffer helpers.

A pixel buffer is a NumPy array of shape (height, width, 3) and dtype uint8,
addressed as ``arr[y, x, channel]``. Row-major flattening of that array is the
raster order (left-to-right, top-to-bottom) used by the text codec.
"""

import logging
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image

from .errors import UnsupportedFormat

logger = logging.getLogger(__name__)


def as_pixels(obj) -> np.ndarray:
    """
    Return a fresh (h, w, 3) uint8 copy of a PIL image or array-like.
    PIL images in any mode are converted to RGB first (alpha is dropped).
    """
    if isinstance(obj, Image.Image):
        obj = obj.convert("RGB")
    arr = np.array(obj)  # np.array always copies, so callers never alias the source

    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"Expected an RGB pixel buffer of shape (h, w, 3), got {arr.shape}")
    h, w, _ = arr.shape
    if h == 0 or w == 0:
        raise ValueError("Pixel buffer must have non-zero width and height")

    if not (np.issubdtype(arr.dtype, np.integer) or arr.dtype == np.bool_):
        raise ValueError(f"Channel values must be integers, got dtype {arr.dtype}")
    if arr.dtype != np.uint8:
        if arr.size and (arr.min() < 0 or arr.max() > 255):
            raise ValueError("Channel values must be in range 0..255")
        arr = arr.astype(np.uint8)
    return arr


def dimensions(pixels: np.ndarray) -> Tuple[int, int]:
    """(width, height) of a pixel buffer, matching PIL's ``Image.size`` order."""
    h, w = pixels.shape[:2]
    return w, h


def to_image(pixels: np.ndarray) -> Image.Image:
    # uint8 (h, w, 3) arrays map to RGB without an explicit mode
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def load_pixels(path) -> np.ndarray:
    with Image.open(path) as img:
        arr = as_pixels(img)
    logger.debug("Loaded %s (%dx%d)", path, arr.shape[1], arr.shape[0])
    return arr


def save_pixels(pixels: np.ndarray, path) -> None:
    # Format follows the file extension; PNG keeps the low bits intact
    suffix = Path(path).suffix.lower()
    if suffix not in Image.registered_extensions():
        raise UnsupportedFormat(
            f"Cannot save {path}: unknown image file extension {suffix!r} (use .png)",
            details={"extension": suffix},
        )
    to_image(pixels).save(path)
    logger.debug("Saved %s (%dx%d)", path, pixels.shape[1], pixels.shape[0])
