from __future__ import annotations
import math
from typing import Iterator, NamedTuple, Tuple


class Rect(NamedTuple):
    """Half-open integer rectangle [x0, x1) x [y0, y1)."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def empty(self) -> bool:
        return self.x1 <= self.x0 or self.y1 <= self.y0


def round_half_away(value: float) -> int:
    # Python's round() is banker's rounding; grid keys need halves rounded away from zero
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def image_bounds(image) -> Rect:
    h, w = image.shape[0], image.shape[1]
    return Rect(0, 0, w, h)


def scaled_bounds(bounds: Rect, scale: float) -> Rect:
    return Rect(
        round_half_away(bounds.x0 * scale),
        round_half_away(bounds.y0 * scale),
        round_half_away(bounds.x1 * scale),
        round_half_away(bounds.y1 * scale),
    )


def grid_positions(bounds: Rect, block_size: int) -> Iterator[Tuple[int, int]]:
    """
    Yield top-left (x, y) of every grid cell over ``bounds``.

    The walk overshoots the far edges by up to one block so the last partial
    strip on each axis is covered too.
    """
    for y in range(bounds.y0, bounds.y1 + block_size, block_size):
        for x in range(bounds.x0, bounds.x1 + block_size, block_size):
            yield x, y


def sample_key(x: int, y: int, scale: float) -> Tuple[int, int]:
    return round_half_away(x / scale), round_half_away(y / scale)


def sample_region(x: int, y: int, block_size: int, scale: float) -> Rect:
    """Map a destination cell back to the source-space region it samples."""
    px, py = sample_key(x, y, scale)
    qx, qy = sample_key(x + block_size, y + block_size, scale)
    return Rect(px, py, qx, qy)
