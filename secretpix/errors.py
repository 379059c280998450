# secretpix/errors.py
"""
Error taxonomy for the bit-plane codecs.

Every failure here is deterministic and caused by the inputs, so callers can
report the message and stop; nothing is worth retrying.
"""

from typing import Any, Dict, Optional


class StegoError(ValueError):
    """Base class for codec errors. Subclasses ValueError like the rest of the input checks."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SizeMismatch(StegoError):
    """Secret image is larger than the carrier and was not reconciled."""


class InsufficientCapacity(StegoError):
    """Text plus its 4-byte length prefix needs more pixels than the carrier has."""


class ImageTooSmall(StegoError):
    """Image cannot hold the length prefix, or the length it declares."""


class DegenerateImage(StegoError):
    """Flat image (global min == max) handed to the normalizer in strict mode."""


class UnsupportedText(StegoError):
    """Text contains a character that does not fit in a single byte."""


class UnsupportedFormat(StegoError):
    """Output path has no extension Pillow can map to an image format."""
