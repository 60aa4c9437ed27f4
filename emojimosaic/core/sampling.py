from __future__ import annotations
import numpy as np
from typing import Tuple

from .geometry import Rect, image_bounds

RGBA = Tuple[int, int, int, int]


def clamp_region(region: Rect, bounds: Rect) -> Rect:
    """
    Fit ``region`` inside ``bounds`` by moving its origin backward.

    A region that runs past the far edge keeps its width/height and is slid
    back so it ends on the edge. It only shrinks when the image itself is
    smaller than the region.
    """
    x0, y0, x1, y1 = region
    if x1 > bounds.x1:
        x0 = bounds.x1 - region.width
        x1 = bounds.x1
    if y1 > bounds.y1:
        y0 = bounds.y1 - region.height
        y1 = bounds.y1
    x0 = max(x0, bounds.x0)
    y0 = max(y0, bounds.y0)
    return Rect(x0, y0, x1, y1)


def region_pixels(image: np.ndarray, region: Rect) -> np.ndarray:
    """Return the (N, 4) pixels covered by ``region`` after clamping."""
    r = clamp_region(region, image_bounds(image))
    if r.empty:
        return np.empty((0, 4), dtype=np.uint8)
    return image[r.y0:r.y1, r.x0:r.x1].reshape(-1, 4)


def rms_color(pixels: np.ndarray) -> RGBA:
    """
    Channel-wise quadratic mean of (N, 4) uint8 pixels.

    Squares are summed as integers and floor-divided by N before the square
    root, then truncated to 8 bits.
    """
    n = pixels.shape[0]
    if n == 0:
        return (0, 0, 0, 0)
    sq = pixels.astype(np.uint64)
    mean_sq = (sq * sq).sum(axis=0) // np.uint64(n)
    avg = np.sqrt(mean_sq.astype(np.float64)).astype(np.uint8)
    return tuple(int(c) for c in avg)


def average_color(image: np.ndarray, region: Rect) -> RGBA:
    return rms_color(region_pixels(image, region))
