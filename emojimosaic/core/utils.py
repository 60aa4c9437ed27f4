from __future__ import annotations
import io
import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import SourceDecodeError


def to_rgba_array(img: Image.Image) -> np.ndarray:
    arr = np.array(img.convert("RGBA"), dtype=np.uint8)
    arr[arr[:, :, 3] == 0] = 0  # fully transparent pixels carry no color
    arr.setflags(write=False)
    return arr


def decode_image(data: bytes) -> np.ndarray:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return to_rgba_array(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise SourceDecodeError(f"cannot decode image: {exc}") from exc


def load_image(path: str) -> np.ndarray:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise SourceDecodeError(f"cannot read image {path}: {exc}") from exc
    return decode_image(data)


def resize_nearest(arr: np.ndarray, size: int) -> np.ndarray:
    img = Image.fromarray(np.array(arr, dtype=np.uint8))
    img = img.resize((size, size), Image.NEAREST)
    return to_rgba_array(img)
