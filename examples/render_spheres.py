#!/usr/bin/env python3
"""Render the demo sphere scene to a PNG file.

Renders a single frame of the default scene headlessly, which is handy for
checking output without a display.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH           Image width in pixels (default: 640)
    --height HEIGHT         Image height in pixels (default: 480)
    --fovx DEGREES          Horizontal field of view (default: 60)
    --fovy DEGREES          Vertical field of view (default: 60)
    --projection MODE       perspective or orthographic (default: perspective)
    --background R G B A    Background color (default: 0 0 0 255)
    --arch ARCH             Taichi backend (default: cpu)
    --output OUTPUT         Output file path (default: spheres.png)
    --rgb                   Write RGB instead of RGBA
    --quiet                 Suppress progress output

Example:
    python -m examples.render_spheres --width 320 --height 240 --projection orthographic
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti
from loguru import logger

_ARCHS = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
    "cuda": ti.cuda,
    "vulkan": ti.vulkan,
    "metal": ti.metal,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo sphere scene to a PNG file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=640, help="Image width in pixels (default: 640)")
    parser.add_argument("--height", type=int, default=480, help="Image height in pixels (default: 480)")
    parser.add_argument("--fovx", type=float, default=60.0, help="Horizontal FOV in degrees (default: 60)")
    parser.add_argument("--fovy", type=float, default=60.0, help="Vertical FOV in degrees (default: 60)")
    parser.add_argument(
        "--projection",
        choices=("perspective", "orthographic"),
        default="perspective",
        help="Projection mode (default: perspective)",
    )
    parser.add_argument(
        "--background",
        type=int,
        nargs=4,
        default=[0, 0, 0, 255],
        metavar=("R", "G", "B", "A"),
        help="Background color (default: 0 0 0 255)",
    )
    parser.add_argument("--arch", choices=tuple(_ARCHS), default="cpu", help="Taichi backend (default: cpu)")
    parser.add_argument("--output", type=str, default="spheres.png", help="Output file path (default: spheres.png)")
    parser.add_argument("--rgb", action="store_true", help="Write RGB instead of RGBA")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def render_spheres(args: argparse.Namespace) -> Path:
    """Render one frame of the demo scene and save it.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so that Taichi is initialized first
    from raycaster.config import RenderConfig
    from raycaster.core.renderer import FrameRenderer
    from raycaster.preview.export import save_png
    from raycaster.scene.demo import create_default_scene

    config = RenderConfig.from_dict(
        {
            "width": args.width,
            "height": args.height,
            "fovx": args.fovx,
            "fovy": args.fovy,
            "projection": args.projection,
            "background": args.background,
            "arch": args.arch,
        }
    )

    scene, camera = create_default_scene(config.make_camera())
    renderer = FrameRenderer(config.width, config.height, background=config.background)

    if not args.quiet:
        print(f"Rendering {scene.get_object_count()} objects at {config.width}x{config.height}...")

    start_time = time.time()
    renderer.render(camera)

    output_file = Path(args.output)
    save_png(renderer, output_file, alpha=not args.rgb)

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="WARNING" if args.quiet else "INFO")

    # Degenerate rays rely on IEEE NaN comparisons
    ti.init(arch=_ARCHS[args.arch], fast_math=False)

    try:
        render_spheres(args)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
