# Shared fixtures: small synthetic RGB images built with NumPy

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def noise_image(rng):
    """Random 16x12 (w x h) RGB buffer."""
    return rng.integers(0, 256, size=(12, 16, 3), dtype=np.uint8)


@pytest.fixture
def low_contrast_image():
    """Values confined to 40..200 so normalization has work to do."""
    arr = np.zeros((10, 10, 3), dtype=np.uint8)
    arr[..., 0] = np.linspace(40, 200, 10, dtype=np.uint8)[None, :]
    arr[..., 1] = 120
    arr[..., 2] = np.linspace(200, 60, 10, dtype=np.uint8)[:, None]
    return arr


@pytest.fixture
def save_png(tmp_path):
    """Write a pixel buffer to tmp_path as PNG and return the path."""
    def _save(arr, name="image.png"):
        path = tmp_path / name
        Image.fromarray(arr).save(path)
        return path
    return _save
