#!/usr/bin/env python3
"""
SphereTrace - A Python Path Tracer for Spheres

Main entry point for rendering scenes.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from spheretrace.camera import Camera
from spheretrace.renderer import Renderer, RenderSettings
from spheretrace.scenes import default_scene
from spheretrace.scene_parser import SceneParseError, load_scene, parse_aspect_ratio

logger = logging.getLogger("spheretrace")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='SphereTrace - A Python Path Tracer for Spheres',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output out/image.png
  python main.py --width 800 --aspect 4:3 --samples 200 --seed 42
  python main.py --scene scenes/three_spheres.yaml --threads 0 --output out/image.ppm
        '''
    )

    parser.add_argument('--scene', type=str, default=None,
                        help='Scene file (YAML or JSON); the demo scene is used if omitted')
    parser.add_argument('--width', type=int, default=None, help='Image width (default: 400)')
    parser.add_argument('--aspect', type=str, default=None, help='Aspect ratio, e.g. 16:9 or 1.5 (default: 16:9)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel (default: 50)')
    parser.add_argument('--depth', type=int, default=None, help='Max bounce depth (default: 50)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto, default: 1)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible render')
    parser.add_argument('--output', type=str, default='out/image.png',
                        help='Output filename, .ppm or any format Pillow can write (default: out/image.png)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        if args.scene:
            world, settings = load_scene(args.scene)
        else:
            world, settings = default_scene(), RenderSettings()

        # Command line flags override the scene file
        if args.width is not None:
            settings.image_width = args.width
        if args.aspect is not None:
            settings.aspect_ratio = parse_aspect_ratio(args.aspect)
        if args.samples is not None:
            settings.samples_per_pixel = args.samples
        if args.depth is not None:
            settings.max_depth = args.depth
        if args.threads is not None:
            settings.num_threads = args.threads if args.threads > 0 else (os.cpu_count() or 4)
        if args.seed is not None:
            settings.seed = args.seed
        settings.validate()
    except (SceneParseError, ValueError) as e:
        logger.error("%s", e)
        return 1

    print("=" * 60)
    print("SphereTrace Path Tracer")
    print("=" * 60)
    print(f"  Resolution: {settings.image_width}x{settings.image_height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")
    print(f"  Objects in scene: {len(world)}")

    camera = Camera(aspect_ratio=settings.aspect_ratio)
    renderer = Renderer(settings)

    # Progress tracking
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

    image = renderer.render(world, camera)
    print()

    # Ensure output directory exists
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info("Saving to %s", output_path)
    image.save(output_path)

    return 0


if __name__ == '__main__':
    sys.exit(main())
