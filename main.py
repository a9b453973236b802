#!/usr/bin/env python3
"""
Pathweaver - A Python Monte Carlo Path Tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from pathweaver.renderer import Renderer, RenderSettings
from pathweaver.scenes import random_scene, ground_scene, cover_camera, ground_camera


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Pathweaver - A Python Monte Carlo Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene cover --output render.ppm
  python main.py --width 800 --height 400 --samples 200 --output cover.png
  python main.py --scene ground --samples 16 --seed 7 --output ground.ppm
        '''
    )

    parser.add_argument('--width', type=int, default=200, help='Image width (default: 200)')
    parser.add_argument('--height', type=int, default=100, help='Image height (default: 100)')
    parser.add_argument('--samples', type=int, default=100, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=50, help='Max bounce depth (default: 50)')
    parser.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible render')
    parser.add_argument('--output', type=str, default='output/render.ppm', help='Output filename')
    parser.add_argument('--scene', type=str, default='cover', choices=['cover', 'ground'],
                        help='Scene to render (default: cover)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log render details')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            num_threads=args.threads,
            seed=args.seed
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print("=" * 60)
    print("Pathweaver Path Tracer")
    print("=" * 60)

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")
    print(f"  Seed: {settings.seed if settings.seed is not None else 'random'}")

    print(f"\nCreating scene: {args.scene}")
    if args.scene == 'ground':
        world = ground_scene()
        camera = ground_camera(settings.aspect_ratio)
    else:
        world = random_scene(np.random.default_rng(settings.seed))
        camera = cover_camera(settings.aspect_ratio)

    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)

    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(world, camera)

    elapsed = max(time.time() - start_time, 1e-9)
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Rays per second: {(settings.width * settings.height * settings.samples_per_pixel) / elapsed:.0f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    renderer.save_image(image, output_path)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
