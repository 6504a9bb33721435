# main.py
import argparse
import random
import sys
import time
from typing import List, Optional

from pathtracer.renderer.image_io import save_image
from pathtracer.renderer.raytracer import (Renderer, RenderConfigError, RenderError,
                                           default_thread_count, image_height_for)
from pathtracer.scenes import SCENES, build_scene

QUALITY_LEVELS = {
    "interactive": {"samples": 4, "bounces": 8},
    "balanced": {"samples": 32, "bounces": 25},
    "high_quality": {"samples": 100, "bounces": 50},
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="pathtracer",
                                description="Render a sphere scene with a multi-threaded path tracer.")
    p.add_argument("--scene", choices=sorted(SCENES), default="three_spheres")
    p.add_argument("--width", type=int, default=400, help="image width in pixels")
    p.add_argument("--aspect-ratio", type=float, default=16.0 / 9.0,
                   help="width / height; the height is derived from it")
    p.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default="balanced")
    p.add_argument("--samples", type=int, help="samples per pixel (overrides --quality)")
    p.add_argument("--max-depth", type=int, help="bounce limit (overrides --quality)")
    p.add_argument("--threads", type=int, default=default_thread_count())
    p.add_argument("--seed", type=int, help="seed for scene generation and sampling")
    p.add_argument("--output", default="image.ppm",
                   help="output file; .ppm is written as P3 text, other extensions via Pillow")
    p.add_argument("--no-progress", action="store_true", help="hide the progress bar")
    p.add_argument("--debug", action="store_true", help="print render statistics")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    quality = QUALITY_LEVELS[args.quality]
    samples = args.samples if args.samples is not None else quality["samples"]
    max_depth = args.max_depth if args.max_depth is not None else quality["bounces"]

    try:
        height = image_height_for(args.width, args.aspect_ratio)
        renderer = Renderer(args.width, height, samples_per_pixel=samples,
                            max_depth=max_depth, threads=args.threads, seed=args.seed,
                            show_progress=not args.no_progress, debug_mode=args.debug)
    except RenderConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    world, camera = build_scene(args.scene, args.aspect_ratio, random.Random(args.seed))

    print("\n=== Initializing Renderer ===")
    print(f"Scene: {args.scene} ({len(world)} objects)")
    print(f"Render resolution: {args.width}x{height}")
    print(f"Quality settings: {args.quality}")
    print(f"Samples per pixel: {samples}")
    print(f"Max bounces: {max_depth}")
    print(f"Threads: {args.threads}")

    start = time.perf_counter()
    try:
        image = renderer.render(world, camera)
    except RenderError as e:
        print(f"Error: render failed: {e}", file=sys.stderr)
        return 1
    print(f"Rendered in {time.perf_counter() - start:.2f}s")

    try:
        save_image(image, args.output)
    except OSError as e:
        print(f"Error: could not write {args.output}: {e}", file=sys.stderr)
        return 1
    print(f"Wrote {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
