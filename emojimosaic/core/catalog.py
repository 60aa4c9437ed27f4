"""
catalog.py

Tile catalog loading.

Every regular file in the tile directory is decoded and resized to a square
tile with nearest-neighbour resampling so icon edges stay hard. Files that
fail to decode are logged and skipped; a directory that yields no tiles at
all is an error.
"""

from __future__ import annotations
import logging
import os
import numpy as np
from typing import Dict, List

from . import utils
from .errors import EmptyCatalog, PerTileDecodeError, SourceDecodeError
from .geometry import image_bounds
from .sampling import RGBA, average_color

logger = logging.getLogger(__name__)


def list_tile_files(path: str) -> List[str]:
    """Sorted names of the regular files in ``path``. Raises OSError if unreadable."""
    names = []
    with os.scandir(path) as it:
        for entry in it:
            if entry.is_file():
                names.append(entry.name)
    return sorted(names)


def load_tile(path: str, size: int) -> np.ndarray:
    name = os.path.basename(path)
    try:
        tile = utils.load_image(path)
    except SourceDecodeError as exc:
        raise PerTileDecodeError(name, exc.__cause__ or exc) from exc
    return utils.resize_nearest(tile, size)


def load_catalog(path: str, tile_size: int) -> Dict[str, np.ndarray]:
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive; got {tile_size}")

    catalog: Dict[str, np.ndarray] = {}
    for name in list_tile_files(path):
        try:
            catalog[name] = load_tile(os.path.join(path, name), tile_size)
        except PerTileDecodeError as exc:
            logger.warning("%s", exc)
            continue

    if not catalog:
        raise EmptyCatalog(path)
    logger.info("loaded %d tiles from %s at %dpx", len(catalog), path, tile_size)
    return catalog


def catalog_colors(catalog: Dict[str, np.ndarray]) -> Dict[str, RGBA]:
    return {name: average_color(tile, image_bounds(tile)) for name, tile in catalog.items()}
