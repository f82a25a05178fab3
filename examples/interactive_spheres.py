#!/usr/bin/env python3
"""Interactive sphere viewer.

Opens a preview window on the demo scene and renders one frame per loop
iteration until the window is closed or Escape is pressed.

Usage:
    python -m examples.interactive_spheres [--width W] [--height H]

Controls:
    - Escape: quit
    - Space: toggle perspective / orthographic projection
    - Up / Down: vertical field of view +/- 1 degree
    - Right / Left: horizontal field of view +/- 1 degree
"""

from __future__ import annotations

import argparse
import platform
import sys

import taichi as ti


def initialize_taichi() -> str:
    """Initialize Taichi with the best available backend.

    On macOS, prefers Metal. Falls back to CPU if GPU is unavailable.

    Returns:
        Name of the backend being used.
    """
    if platform.system() == "Darwin":
        try:
            ti.init(arch=ti.metal, fast_math=False)
            return "Metal (GPU)"
        except Exception:
            pass

    try:
        ti.init(arch=ti.gpu, fast_math=False)
        return "GPU"
    except Exception:
        pass

    ti.init(arch=ti.cpu, fast_math=False)
    return "CPU"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Interactive sphere viewer.")
    parser.add_argument("--width", type=int, default=640, help="Window width in pixels (default: 640)")
    parser.add_argument("--height", type=int, default=480, help="Window height in pixels (default: 480)")
    parser.add_argument(
        "--orthographic",
        action="store_true",
        help="Start in orthographic projection",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the interactive viewer.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args(argv)

    # Initialize Taichi first (before importing modules that declare fields)
    backend = initialize_taichi()
    print(f"Taichi backend: {backend}")

    from raycaster.config import RenderConfig
    from raycaster.preview.interactive import InteractivePreview, is_display_available
    from raycaster.scene.demo import create_default_scene

    if not is_display_available():
        print("Error: No display available. Use examples/render_spheres.py instead.", file=sys.stderr)
        return 1

    try:
        config = RenderConfig(
            width=args.width,
            height=args.height,
            projection="orthographic" if args.orthographic else "perspective",
        )
        config.validate()

        _, camera = create_default_scene(config.make_camera())
        preview = InteractivePreview(config.width, config.height, camera)

        print("Controls: Esc quit | Space toggle projection | Arrows adjust FOV")
        frames = preview.run()
        print(f"Rendered {frames} frames")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
