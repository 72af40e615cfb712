"""
Pytest fixtures shared by the convolution tests.
"""
import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_image(rng):
    """Random 23x37 RGB image (height x width)."""
    return rng.integers(0, 256, size=(23, 37, 3), dtype=np.uint8)


@pytest.fixture
def white_dot_image():
    """4x4 black image with a single white pixel at x=1, y=1."""
    img = np.zeros((4, 4, 3), dtype=np.uint8)
    img[1, 1] = 255
    return img


@pytest.fixture
def images_dir(tmp_path):
    """images/ folder holding one small JPEG."""
    folder = tmp_path / "images"
    folder.mkdir()
    arr = np.zeros((12, 16, 3), dtype=np.uint8)
    arr[:, 8:] = (200, 120, 40)
    Image.fromarray(arr).save(folder / "photo.jpg")
    return folder


@pytest.fixture
def answers(monkeypatch):
    """Feed canned answers to input() prompts."""
    def feed(*values):
        it = iter(values)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(it))
    return feed
