"""
planner.py

Builds the similarity map: for every cell of the scaled grid, the tiles whose
average color is nearest to the source region the cell samples.

The map is keyed by the *source-space* top-left of the sampled region, so the
renderer can walk the destination grid again and re-derive the same key.
"""

from __future__ import annotations
import logging
import types
import numpy as np
from typing import Dict, Mapping, Optional, Tuple

from tqdm import tqdm

from .geometry import image_bounds, sample_key, sample_region, scaled_bounds
from .index import ColorIndex, TileRecord
from .sampling import average_color

logger = logging.getLogger(__name__)

DEFAULT_JITTER = 3

GridKey = Tuple[int, int]


class SimilarityMap:
    """Read-only map from grid key to candidate tiles, shared by all frame workers."""

    def __init__(self, entries: Dict[GridKey, Tuple[TileRecord, ...]], catalog: Mapping[str, np.ndarray]):
        self._entries = types.MappingProxyType(dict(entries))
        self._catalog = types.MappingProxyType(dict(catalog))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def keys(self):
        return self._entries.keys()

    def candidates(self, key: GridKey) -> Tuple[TileRecord, ...]:
        return self._entries.get(key, ())

    def tile(self, name: str) -> np.ndarray:
        return self._catalog[name]

    def pick(self, key: GridKey, rng: np.random.Generator) -> Optional[np.ndarray]:
        """One candidate tile for ``key`` drawn uniformly with ``rng``, or None."""
        items = self._entries.get(key)
        if not items:
            return None
        record = items[int(rng.integers(0, len(items)))]
        return self._catalog[record.name]


def plan(
    index: ColorIndex,
    catalog: Mapping[str, np.ndarray],
    image: np.ndarray,
    block_size: int,
    scale: float,
    jitter: int = DEFAULT_JITTER,
    verbose: bool = False,
) -> SimilarityMap:
    if block_size <= 0:
        raise ValueError(f"block_size must be positive; got {block_size}")
    if scale <= 0:
        raise ValueError(f"scale must be positive; got {scale}")
    logger.debug("planning against %d indexed tiles", len(index))

    bounds = scaled_bounds(image_bounds(image), scale)
    rows = range(bounds.y0, bounds.y1 + block_size, block_size)
    row_iter = tqdm(rows, desc="planning") if verbose else rows

    entries: Dict[GridKey, Tuple[TileRecord, ...]] = {}
    for y in row_iter:
        for x in range(bounds.x0, bounds.x1 + block_size, block_size):
            clr = average_color(image, sample_region(x, y, block_size, scale))
            if clr[3] == 0:
                continue
            entries[sample_key(x, y, scale)] = tuple(index.nearest(jitter, clr))

    similarity = SimilarityMap(entries, catalog)
    logger.info("planned %d cells over %dx%d (block=%d, scale=%g)",
                len(similarity), bounds.width, bounds.height, block_size, scale)
    return similarity
