# secretpix/detect.py
from pathlib import Path

# Encoders for these extensions discard low-order bits (GIF via palette reduction)
LOSSY_EXTENSIONS = (".jpg", ".jpeg", ".jpe", ".jfif", ".webp", ".gif")


def detect_file_type(path):
    """
    Detects the type of an image file based on its magic number (signature).
    Reads the first few bytes of the file and compares them to known patterns.
    """
    with open(path, "rb") as f:        # Open file in binary mode
        sig = f.read(12)               # Read first 12 bytes (signature)

    if sig.startswith(b"\x89PNG"):
        return "png"
    elif sig.startswith(b"\xFF\xD8"):
        return "jpeg"
    elif sig.startswith(b"BM"):
        return "bmp"
    elif sig.startswith((b"GIF87a", b"GIF89a")):
        return "gif"
    elif sig.startswith((b"II*\x00", b"MM\x00*")):
        return "tiff"
    # WEBP is a RIFF container with "WEBP" at offset 8
    elif sig.startswith(b"RIFF") and sig[8:12] == b"WEBP":
        return "webp"
    else:
        return "unknown"


def is_lossy_output(path):
    """True if saving to ``path`` would go through a lossy encoder."""
    return Path(path).suffix.lower() in LOSSY_EXTENSIONS
