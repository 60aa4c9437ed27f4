"""
pipeline.py

End-to-end mosaic generation.

Flow: tile catalog -> color index -> similarity map for the source image ->
N frames rendered in parallel -> animated GIF bytes.
"""

from __future__ import annotations
import logging
import numpy as np
from typing import Dict, List

from PIL import Image

from .config import MosaicConfig
from .core import utils
from .core.catalog import catalog_colors, load_catalog
from .core.geometry import image_bounds, scaled_bounds
from .core.index import ColorIndex, build_index
from .core.planner import SimilarityMap, plan
from .core.render import render_frames
from .visualization.animation import assemble, save_animation, uniform_delays

logger = logging.getLogger(__name__)


class Mosaic:
    """Tile catalog and color index for one tile directory and block size, built once."""

    def __init__(self, tiles_dir: str, block_size: int):
        self.tiles_dir = tiles_dir
        self.block_size = block_size
        self.catalog: Dict[str, np.ndarray] = load_catalog(tiles_dir, block_size)
        self.index: ColorIndex = build_index(catalog_colors(self.catalog))

    def learn(self, image: np.ndarray, scale: float, jitter: int, verbose: bool = False) -> SimilarityMap:
        return plan(self.index, self.catalog, image, self.block_size, scale, jitter=jitter, verbose=verbose)

    def frames(self, image: np.ndarray, config: MosaicConfig) -> List[Image.Image]:
        similarity = self.learn(image, config.scale, config.jitter, verbose=config.verbose)
        dest = scaled_bounds(image_bounds(image), config.scale)
        return render_frames(
            similarity,
            self.block_size,
            config.scale,
            dest,
            config.frames,
            seed=config.seed,
            workers=config.workers,
            verbose=config.verbose,
        )

    def render(self, image: np.ndarray, config: MosaicConfig) -> bytes:
        frames = self.frames(image, config)
        return assemble(frames, uniform_delays(len(frames), config.delay))


def generate_mosaic(config: MosaicConfig) -> bytes:
    config.validate()

    logger.info("loading tile images for size %d from %s", config.block_size, config.tiles_dir)
    mosaic = Mosaic(config.tiles_dir, config.block_size)

    logger.info("loading input image %s", config.input_path)
    image = utils.load_image(config.input_path)

    frames = mosaic.frames(image, config)
    delays = uniform_delays(len(frames), config.delay)
    if not config.output_path:
        return assemble(frames, delays)
    data = save_animation(config.output_path, frames, delays)
    logger.info("wrote %s (%d bytes)", config.output_path, len(data))
    return data
