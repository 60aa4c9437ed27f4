from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional

from .core.errors import ConfigError
from .core.planner import DEFAULT_JITTER
from .visualization.animation import DEFAULT_DELAY

# Where tile images are looked up by default, relative to the working directory.
DEFAULT_TILES_DIR = "emojis"
# Largest pixel block a tile may be rendered at.
TILE_RENDER_SIZE = 72


@dataclass(frozen=True)
class MosaicConfig:
    """All parameters of one mosaic run. Validate once, then pass around."""

    input_path: str
    output_path: Optional[str] = None
    tiles_dir: str = DEFAULT_TILES_DIR
    block_size: int = 1
    scale: float = 1.0
    frames: int = 1
    jitter: int = DEFAULT_JITTER
    delay: int = DEFAULT_DELAY
    tile_render_size: int = TILE_RENDER_SIZE
    seed: Optional[int] = None
    workers: Optional[int] = None
    verbose: bool = False

    def validate(self) -> "MosaicConfig":
        if not 1 <= self.block_size <= self.tile_render_size:
            raise ConfigError(f"pixel size must be in [1, {self.tile_render_size}]; got {self.block_size}")
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise ConfigError(f"scale must be positive; got {self.scale}")
        if self.frames <= 0:
            raise ConfigError(f"frames must be positive; got {self.frames}")
        if self.jitter < 1:
            raise ConfigError(f"jitter must be at least 1; got {self.jitter}")
        if self.delay < 0:
            raise ConfigError(f"delay must be non-negative; got {self.delay}")
        if self.workers is not None and self.workers < 1:
            raise ConfigError(f"workers must be positive; got {self.workers}")
        return self


def usage(prefix: str = "Usage: ") -> str:
    return (
        f"{prefix}emojimosaic -i <input_image.(png|jpg)> -o <output_image.gif> "
        f"-p <pixel_size [1, {TILE_RENDER_SIZE}]> -s <scale (0,]> -f <frames (0,]>"
    )
