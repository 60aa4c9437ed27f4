import argparse
import logging
import sys

from emojimosaic.config import DEFAULT_TILES_DIR, TILE_RENDER_SIZE, MosaicConfig, usage
from emojimosaic.core.errors import CatalogError, ConfigError, SourceDecodeError
from emojimosaic.core.planner import DEFAULT_JITTER
from emojimosaic.pipeline import generate_mosaic
from emojimosaic.visualization.animation import DEFAULT_DELAY


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="emojimosaic — generate a mosaic gif with emoji.", usage=usage(prefix=""))
    parser.add_argument("-i", "--input", required=True, help="Input image (png or jpg)")
    parser.add_argument("-o", "--out", required=True, help="Output gif")
    parser.add_argument("-e", "--emojis", default=DEFAULT_TILES_DIR, help="Directory of emoji tile images")
    parser.add_argument("-p", "--pixels", type=int, default=1, help=f"Emoji size in pixels, 1..{TILE_RENDER_SIZE}")
    parser.add_argument("-s", "--scale", type=float, default=1.0, help="Scale for output")
    parser.add_argument("-f", "--frames", type=int, default=1, help="Number of animation frames")
    parser.add_argument("--jitter", type=int, default=DEFAULT_JITTER, help="Nearest emojis to pick from randomly")
    parser.add_argument("--delay", type=int, default=DEFAULT_DELAY, help="Frame delay in centiseconds")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible frames")
    parser.add_argument("--workers", type=int, default=None, help="Frame render threads")
    parser.add_argument("--quiet", action="store_true", help="Hide progress bars")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    config = MosaicConfig(
        input_path=args.input,
        output_path=args.out,
        tiles_dir=args.emojis,
        block_size=args.pixels,
        scale=args.scale,
        frames=args.frames,
        jitter=args.jitter,
        delay=args.delay,
        seed=args.seed,
        workers=args.workers,
        verbose=not args.quiet,
    )
    try:
        config.validate()
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        print(usage(), file=sys.stderr)
        return 2

    print(f"Generating {config.frames} frame(s) with {config.block_size}px emoji from {config.tiles_dir}...")
    try:
        generate_mosaic(config)
    except (CatalogError, SourceDecodeError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"Done. Saved GIF to {config.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
