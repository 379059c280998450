# secretpix/text_codec.py
"""
Text-in-image codec: 1 bit per pixel in the red channel's LSB.

Bitstream layout (MSB-first within every byte):
  [4-byte big-endian text length] + [text bytes]

Bits are written one per pixel starting at (0, 0) in raster order (x first,
wrapping to the next row). Green, blue and the upper 7 bits of red are left
untouched. Each character is one byte, so only code points 0..255 are accepted.

Public API:
- text_capacity(pixels)
- hide_text(pixels, text)
- extract_text(pixels)
- hide_text_file(image_path, output_path, text)
- extract_text_file(image_path)
"""

import logging
from typing import List

import numpy as np

from .errors import ImageTooSmall, InsufficientCapacity, UnsupportedText
from .pixels import as_pixels, load_pixels, save_pixels

logger = logging.getLogger(__name__)

LENGTH_PREFIX_BYTES = 4
LENGTH_PREFIX_BITS = LENGTH_PREFIX_BYTES * 8
RED = 0


# ===== Helpers =====

def _bytes_to_bits(data: bytes) -> List[int]:
    bits = []
    for byte in data:
        for i in range(7, -1, -1):
            bits.append((byte >> i) & 1)
    return bits


def _bits_to_bytes(bits) -> bytes:
    out = bytearray()
    for i in range(0, len(bits) - len(bits) % 8, 8):
        byte = 0
        for j in range(8):
            byte = (byte << 1) | (int(bits[i + j]) & 1)
        out.append(byte)
    return bytes(out)


def _encode_text(text: str) -> bytes:
    try:
        return text.encode("latin-1")
    except UnicodeEncodeError as e:
        bad = text[e.start]
        raise UnsupportedText(
            f"Character {bad!r} (U+{ord(bad):04X}) at position {e.start} does not fit "
            f"in one byte; only code points 0..255 can be hidden",
            details={"position": e.start},
        ) from e


def _red_lsbs(pixels: np.ndarray, start: int, count: int) -> np.ndarray:
    # Row-major flattening of the red plane is raster order
    return pixels[:, :, RED].reshape(-1)[start:start + count] & 1


# ===== Public API =====

def text_capacity(pixels) -> int:
    """Largest text (in bytes) the image can hold after the length prefix."""
    h, w = as_pixels(pixels).shape[:2]
    return max(w * h // 8 - LENGTH_PREFIX_BYTES, 0)


def hide_text(pixels, text: str) -> np.ndarray:
    """
    Embed ``text`` into the red-channel LSBs of a copy of ``pixels``.

    Raises:
      UnsupportedText: a character is outside 0..255.
      InsufficientCapacity: (len(text) + 4) * 8 > width * height.
    """
    arr = as_pixels(pixels)
    h, w = arr.shape[:2]
    data = _encode_text(text)

    required_pixels = (len(data) + LENGTH_PREFIX_BYTES) * 8
    if required_pixels > w * h:
        raise InsufficientCapacity(
            f"Insufficient space in the image to hide the text: need {required_pixels} "
            f"pixels, image has {w * h}",
            details={"required": required_pixels, "available": w * h},
        )

    header = len(data).to_bytes(LENGTH_PREFIX_BYTES, byteorder="big")
    bits = np.array(_bytes_to_bits(header + data), dtype=np.uint8)

    red = arr[:, :, RED].reshape(-1)  # copy: the red plane is not contiguous
    red[:len(bits)] = (red[:len(bits)] & 0xFE) | bits
    arr[:, :, RED] = red.reshape(h, w)

    logger.debug("Hid %d bytes of text in %d of %d pixels", len(data), len(bits), w * h)
    return arr


def extract_text(pixels) -> str:
    """
    Read the length prefix, then that many bytes, from the red-channel LSBs.

    Raises ImageTooSmall if the image has fewer than 32 pixels, or fewer than
    the declared length requires.
    """
    arr = as_pixels(pixels)
    h, w = arr.shape[:2]
    available_pixels = w * h

    if available_pixels < LENGTH_PREFIX_BITS:
        raise ImageTooSmall(
            f"The image is too small to contain the text length: {available_pixels} "
            f"pixels, need at least {LENGTH_PREFIX_BITS}",
            details={"available": available_pixels},
        )

    header = _bits_to_bytes(_red_lsbs(arr, 0, LENGTH_PREFIX_BITS))
    text_len = int.from_bytes(header, byteorder="big")

    needed = LENGTH_PREFIX_BITS + text_len * 8
    if needed > available_pixels:
        raise ImageTooSmall(
            f"The image declares {text_len} bytes of text but only has room for "
            f"{(available_pixels - LENGTH_PREFIX_BITS) // 8}",
            details={"declared": text_len, "available": available_pixels},
        )

    data = _bits_to_bytes(_red_lsbs(arr, LENGTH_PREFIX_BITS, text_len * 8))
    logger.debug("Extracted %d bytes of text", text_len)
    return data.decode("latin-1")


def hide_text_file(image_path, output_path, text: str) -> None:
    arr = load_pixels(image_path)
    save_pixels(hide_text(arr, text), output_path)


def extract_text_file(image_path) -> str:
    return extract_text(load_pixels(image_path))
