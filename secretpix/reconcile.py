# secretpix/reconcile.py
"""
Dimension reconciliation between a carrier and a secret image.

Needed only when the carrier is smaller than the secret in at least one axis.
The target size is the per-axis maximum of the two images, and every image
that differs from it is brought up to it:

- RESIZE: Lanczos resampling to exactly the target width and height.
- EXPAND: the image is kept unchanged in the top-left corner and the new
  rows/columns are filled with black (0, 0, 0).
"""

import logging
from enum import Enum
from typing import Optional, Tuple

import cv2
import numpy as np
from PIL import Image

from .errors import SizeMismatch
from .pixels import as_pixels, dimensions, to_image

logger = logging.getLogger(__name__)


class ReconcilePolicy(str, Enum):
    RESIZE = "resize"
    EXPAND = "expand"


def needs_reconcile(carrier: np.ndarray, secret: np.ndarray) -> bool:
    cw, ch = dimensions(carrier)
    sw, sh = dimensions(secret)
    return cw < sw or ch < sh


def target_size(carrier: np.ndarray, secret: np.ndarray) -> Tuple[int, int]:
    cw, ch = dimensions(carrier)
    sw, sh = dimensions(secret)
    return max(cw, sw), max(ch, sh)


def resize_to(pixels, size: Tuple[int, int]) -> np.ndarray:
    """Resample to ``size`` (width, height) with a Lanczos filter."""
    arr = as_pixels(pixels)
    if dimensions(arr) == tuple(size):
        return arr
    resized = to_image(arr).resize(tuple(size), Image.LANCZOS)
    return as_pixels(resized)


def expand_to(pixels, size: Tuple[int, int]) -> np.ndarray:
    """Pad with black on the right and bottom up to ``size`` (width, height)."""
    arr = as_pixels(pixels)
    w, h = dimensions(arr)
    tw, th = size
    if tw < w or th < h:
        raise ValueError(f"Cannot expand {w}x{h} to a smaller size {tw}x{th}")
    if (tw, th) == (w, h):
        return arr
    return cv2.copyMakeBorder(
        arr, 0, th - h, 0, tw - w,
        borderType=cv2.BORDER_CONSTANT,
        value=(0, 0, 0),
    )


def reconcile(carrier, secret, policy: Optional[ReconcilePolicy] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Return (carrier, secret) ready for the image embedder.

    Images that already fit are returned as copies, whatever the policy.
    Without a policy, a secret that does not fit raises SizeMismatch.
    """
    carrier = as_pixels(carrier)
    secret = as_pixels(secret)

    if not needs_reconcile(carrier, secret):
        return carrier, secret

    if policy is None:
        raise SizeMismatch(
            "The size of the secret image exceeds the size of the source image "
            "(use resize or expand)",
            details={"carrier": dimensions(carrier), "secret": dimensions(secret)},
        )

    policy = ReconcilePolicy(policy)
    size = target_size(carrier, secret)
    logger.debug(
        "Reconciling carrier %s and secret %s to %s with %s",
        dimensions(carrier), dimensions(secret), size, policy.value,
    )

    if policy is ReconcilePolicy.RESIZE:
        return resize_to(carrier, size), resize_to(secret, size)
    return expand_to(carrier, size), expand_to(secret, size)
