# secretpix/image_codec.py
"""
Image-in-image codec: 2 bits per channel.

Hide:    hidden = (carrier & 0b11111100) | (secret >> 6)
Recover: secret ~= (hidden & 0b00000011) * 85

The carrier keeps its top 6 bits and its own low 2 bits are lost. Recovery is
quantized to four levels per channel (0, 85, 170, 255) because only the two
most significant bits of the secret are stored.

Public API:
- hide_image(carrier, secret)
- decrypt_image(hidden)
- prepare_and_hide(carrier, secret, policy=None, normalize=True)
- hide_image_file(source_path, secret_path, output_path, policy=None)
- decrypt_image_file(source_path, output_path)
"""

import logging
from typing import Optional

import numpy as np

from .errors import SizeMismatch
from .normalize import normalize_image
from .pixels import as_pixels, dimensions, load_pixels, save_pixels
from .reconcile import ReconcilePolicy, reconcile

logger = logging.getLogger(__name__)

HIDE_MASK = 0b11111100
SECRET_SHIFT = 6
REVEAL_MASK = 0b00000011
QUANT_STEP = 85  # 255 / 3: spreads the four stored levels over the full range


def hide_image(carrier, secret) -> np.ndarray:
    """
    Embed the top 2 bits of every secret channel into the carrier's low 2 bits.

    Output has the carrier's dimensions. A secret smaller than the carrier is
    placed in the top-left corner and the remaining pixels store zeros.
    """
    carrier = as_pixels(carrier)
    secret = as_pixels(secret)
    cw, ch = dimensions(carrier)
    sw, sh = dimensions(secret)

    if cw < sw or ch < sh:
        raise SizeMismatch(
            f"The size of the secret image ({sw}x{sh}) exceeds the size of the "
            f"source image ({cw}x{ch})",
            details={"carrier": (cw, ch), "secret": (sw, sh)},
        )

    payload = np.zeros_like(carrier)
    payload[:sh, :sw] = secret >> SECRET_SHIFT

    hidden = (carrier & HIDE_MASK) | payload
    logger.debug("Hid %dx%d secret in %dx%d carrier", sw, sh, cw, ch)
    return hidden


def decrypt_image(hidden) -> np.ndarray:
    """Quantized reconstruction of the secret: each channel is one of 0, 85, 170, 255."""
    hidden = as_pixels(hidden)
    return (hidden & REVEAL_MASK) * np.uint8(QUANT_STEP)


def prepare_and_hide(carrier, secret, policy: Optional[ReconcilePolicy] = None, normalize: bool = True) -> np.ndarray:
    """
    Full hiding pipeline: normalize the carrier, reconcile sizes, embed.
    """
    carrier = as_pixels(carrier)
    if normalize:
        carrier = normalize_image(carrier)
    carrier, secret = reconcile(carrier, secret, policy)
    return hide_image(carrier, secret)


def hide_image_file(source_path, secret_path, output_path, policy: Optional[ReconcilePolicy] = None) -> None:
    carrier = load_pixels(source_path)
    secret = load_pixels(secret_path)
    hidden = prepare_and_hide(carrier, secret, policy=policy)
    save_pixels(hidden, output_path)


def decrypt_image_file(source_path, output_path) -> None:
    hidden = load_pixels(source_path)
    save_pixels(decrypt_image(hidden), output_path)
