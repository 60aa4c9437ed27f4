import numpy as np
import pytest
from PIL import Image


def solid(color, size=(4, 4)):
    w, h = size
    arr = np.zeros((h, w, 4), dtype=np.uint8)
    arr[:, :] = color
    return arr


def write_png(path, arr):
    Image.fromarray(arr).save(path)
    return str(path)


@pytest.fixture
def red_blue_tiles(tmp_path):
    d = tmp_path / "emojis"
    d.mkdir()
    write_png(d / "red.png", solid((255, 0, 0, 255)))
    write_png(d / "blue.png", solid((0, 0, 255, 255)))
    return str(d)


@pytest.fixture
def rainbow_tiles(tmp_path):
    d = tmp_path / "rainbow"
    d.mkdir()
    colors = [
        (255, 0, 0, 255), (230, 20, 0, 255), (210, 0, 30, 255),
        (0, 255, 0, 255), (20, 230, 0, 255), (0, 210, 30, 255),
        (0, 0, 255, 255), (20, 0, 230, 255), (0, 30, 210, 255),
    ]
    for i, c in enumerate(colors):
        write_png(d / f"tile_{i}.png", solid(c))
    return str(d)


@pytest.fixture
def multicolor_image():
    rng = np.random.default_rng(7)
    arr = rng.integers(0, 256, size=(6, 6, 4), dtype=np.uint8)
    arr[:, :, 3] = 255
    return arr
