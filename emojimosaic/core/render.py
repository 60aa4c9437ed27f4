from __future__ import annotations
import logging
import os
import numpy as np
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from PIL import Image
from tqdm import tqdm

from .geometry import Rect, grid_positions, sample_key
from .planner import SimilarityMap

logger = logging.getLogger(__name__)

WEB_SAFE_LEVELS = 6
WEB_SAFE_STEP = 0x33
TRANSPARENT_INDEX = WEB_SAFE_LEVELS ** 3  # 216, right after the web-safe colors


def web_safe_palette() -> List[int]:
    """
    Flat RGB list of the 216 web-safe colors (index = r*36 + g*6 + b), plus
    one trailing entry reserved for transparency.
    """
    pal = []
    for r in range(WEB_SAFE_LEVELS):
        for g in range(WEB_SAFE_LEVELS):
            for b in range(WEB_SAFE_LEVELS):
                pal.extend((r * WEB_SAFE_STEP, g * WEB_SAFE_STEP, b * WEB_SAFE_STEP))
    pal.extend((0, 0, 0))
    return pal


WEB_SAFE_PALETTE = web_safe_palette()


def composite_frame(
    similarity: SimilarityMap,
    block_size: int,
    scale: float,
    dest_bounds: Rect,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Paste one randomly chosen candidate tile into every mapped grid cell.

    Tiles overwrite the canvas (no blending) and are clipped at the canvas
    edge. Cells with no candidates are left fully transparent.
    """
    if rng is None:
        rng = np.random.default_rng()
    h, w = dest_bounds.height, dest_bounds.width
    canvas = np.zeros((h, w, 4), dtype=np.uint8)

    for x, y in grid_positions(dest_bounds, block_size):
        tile = similarity.pick(sample_key(x, y, scale), rng)
        if tile is None:
            continue
        cx0, cy0 = x - dest_bounds.x0, y - dest_bounds.y0
        cx1, cy1 = min(cx0 + block_size, w), min(cy0 + block_size, h)
        if cx1 <= cx0 or cy1 <= cy0:
            continue
        canvas[cy0:cy1, cx0:cx1] = tile[: cy1 - cy0, : cx1 - cx0]
    return canvas


def quantize_frame(canvas: np.ndarray) -> Image.Image:
    """RGBA canvas -> "P" image over the web-safe palette, composited on black."""
    rgb = canvas[:, :, :3].astype(np.uint32)
    alpha = canvas[:, :, 3].astype(np.uint32)
    premul = rgb * alpha[:, :, None] // 255
    levels = (premul + WEB_SAFE_STEP // 2) // WEB_SAFE_STEP
    idx = levels[:, :, 0] * 36 + levels[:, :, 1] * 6 + levels[:, :, 2]
    idx[alpha == 0] = TRANSPARENT_INDEX
    idx = idx.astype(np.uint8)

    h, w = idx.shape
    img = Image.frombytes("P", (w, h), idx.tobytes())
    img.putpalette(WEB_SAFE_PALETTE)
    img.info["transparency"] = TRANSPARENT_INDEX
    return img


def render_frame(
    similarity: SimilarityMap,
    block_size: int,
    scale: float,
    dest_bounds: Rect,
    rng: Optional[np.random.Generator] = None,
) -> Image.Image:
    return quantize_frame(composite_frame(similarity, block_size, scale, dest_bounds, rng))


def render_frames(
    similarity: SimilarityMap,
    block_size: int,
    scale: float,
    dest_bounds: Rect,
    frames: int,
    *,
    seed: Optional[int] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
) -> List[Image.Image]:
    """
    Render ``frames`` independent frames concurrently, one task per frame.

    Every task gets its own generator spawned from a single SeedSequence, so
    no random state is shared between threads. Returns frames in order once
    all tasks have finished.
    """
    if frames <= 0:
        raise ValueError(f"frames must be positive; got {frames}")
    children = np.random.SeedSequence(seed).spawn(frames)
    rngs = [np.random.default_rng(c) for c in children]
    max_workers = workers or min(frames, os.cpu_count() or 1)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [
            pool.submit(render_frame, similarity, block_size, scale, dest_bounds, rng)
            for rng in rngs
        ]
        it = tqdm(futures, desc="frames") if verbose else futures
        out = [f.result() for f in it]

    logger.info("rendered %d frames at %dx%d", frames, dest_bounds.width, dest_bounds.height)
    return out
