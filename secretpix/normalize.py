# secretpix/normalize.py
"""
Contrast normalization for carrier images.

One global min/max is taken over every channel of every pixel (not per
channel), then values are stretched linearly onto 0..255:

    v' = round((v - min) / (max - min) * 255)

Rounding is NumPy's round-half-to-even.
"""

import logging
from typing import Tuple

import numpy as np

from .errors import DegenerateImage
from .pixels import as_pixels

logger = logging.getLogger(__name__)


def value_range(pixels: np.ndarray) -> Tuple[int, int]:
    """Global (min, max) over all channels combined."""
    return int(pixels.min()), int(pixels.max())


def normalize_image(pixels, strict: bool = False) -> np.ndarray:
    """
    Return a new buffer whose values span exactly 0..255.

    A flat image (min == max) has no range to stretch: it is returned unchanged
    (as a copy), or DegenerateImage is raised when ``strict`` is set.
    """
    arr = as_pixels(pixels)
    lo, hi = value_range(arr)

    if lo == hi:
        if strict:
            raise DegenerateImage(
                f"Cannot normalize a flat image (every channel value is {lo})",
                details={"value": lo},
            )
        logger.warning("Image is flat (all values %d); skipping normalization", lo)
        return arr

    if lo == 0 and hi == 255:
        return arr

    scaled = (arr.astype(np.float64) - lo) / (hi - lo) * 255.0
    out = np.clip(np.rint(scaled), 0, 255).astype(np.uint8)
    logger.debug("Normalized range %d..%d to 0..255", lo, hi)
    return out
