from __future__ import annotations
import io
from typing import List, Sequence

from PIL import GifImagePlugin, Image

from ..core.render import TRANSPARENT_INDEX

DEFAULT_DELAY = 20  # centiseconds


def assemble(frames: Sequence[Image.Image], delays: Sequence[int], loop: int = 0) -> bytes:
    """
    Encode palette frames as an animated GIF, in order.

    ``delays`` holds one delay per frame in centiseconds, the GIF's native unit.
    Every input frame becomes exactly one GIF frame, identical neighbours
    included, all sharing the first frame's palette as the global table.
    """
    if len(frames) == 0:
        raise ValueError("No frames to assemble.")
    if len(frames) != len(delays):
        raise ValueError(f"got {len(frames)} frames but {len(delays)} delays")
    if any(d < 0 for d in delays):
        raise ValueError("delays must be non-negative")

    size = frames[0].size
    for frame in frames:
        if frame.mode != "P" or frame.size != size:
            raise ValueError(f"frames must be {size[0]}x{size[1]} \"P\" images; got {frame.mode} {frame.size}")

    buf = io.BytesIO()
    header, _ = GifImagePlugin.getheader(frames[0].copy(), info={"loop": loop, "transparency": TRANSPARENT_INDEX})
    buf.writelines(header)
    for frame, delay in zip(frames, delays):
        buf.writelines(GifImagePlugin.getdata(
            frame,
            duration=int(delay) * 10,
            transparency=TRANSPARENT_INDEX,
            disposal=2,
        ))
    buf.write(b";")
    return buf.getvalue()


def uniform_delays(count: int, delay: int = DEFAULT_DELAY) -> List[int]:
    return [delay] * count


def save_animation(out_path: str, frames: Sequence[Image.Image], delays: Sequence[int]) -> bytes:
    data = assemble(frames, delays)
    with open(out_path, "wb") as f:
        f.write(data)
    return data
