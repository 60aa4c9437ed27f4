from __future__ import annotations
import math
import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from scipy.spatial import cKDTree

from .errors import SpatialQueryError

ColorKey = Tuple[float, float, float, float]


def color_to_point(color: Sequence[float]) -> ColorKey:
    """RGBA color -> 4-D point used as the nearest-neighbour key."""
    if len(color) != 4:
        raise SpatialQueryError(f"expected an RGBA color, got {color!r}")
    point = tuple(float(c) for c in color)
    if not all(math.isfinite(c) for c in point):
        raise SpatialQueryError(f"non-finite color coordinates: {color!r}")
    return point


@dataclass(frozen=True)
class TileRecord:
    name: str
    key: ColorKey

    @property
    def bounds(self) -> Tuple[ColorKey, ColorKey]:
        # zero-volume box at the key
        return (self.key, self.key)


class ColorIndex:
    """
    k-nearest-neighbour search over tile colors in RGBA space.

    Distances are plain Euclidean over (R, G, B, A). Ties are resolved by the
    tree's traversal order.
    """

    def __init__(self, records: Sequence[TileRecord], leafsize: int = 16):
        if len(records) == 0:
            raise ValueError("ColorIndex needs at least one record")
        self.records: Tuple[TileRecord, ...] = tuple(records)
        points = np.array([r.key for r in self.records], dtype=np.float64)
        self._tree = cKDTree(points, leafsize=leafsize)

    def __len__(self) -> int:
        return len(self.records)

    def nearest(self, k: int, color: Sequence[float]) -> List[TileRecord]:
        if k < 1:
            raise SpatialQueryError(f"k must be >= 1; got {k}")
        point = color_to_point(color)
        k = min(k, len(self.records))
        _, idx = self._tree.query(np.asarray(point), k=k)
        return [self.records[int(i)] for i in np.atleast_1d(idx)]


def build_index(colors: Dict[str, Sequence[int]], leafsize: int = 16) -> ColorIndex:
    records = [TileRecord(name, color_to_point(colors[name])) for name in sorted(colors)]
    return ColorIndex(records, leafsize=leafsize)
