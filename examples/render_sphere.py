#!/usr/bin/env python3
"""Render a red sphere above a grey floor plane.

The scene places a sphere of radius 0.5 m five meters in front of the eye and
a floor plane one meter below it. Every pixel is flat shaded with the color of
the nearest surface its primary ray hits.

Usage:
    python -m examples.render_sphere [options]

Options:
    --width WIDTH       Image width in pixels (default: 1280)
    --height HEIGHT     Image height in pixels (default: 720)
    --output OUTPUT     Output file path (default: sphere.png)
    --no-floor          Render the sphere alone
    --quiet             Suppress progress output

Example:
    python -m examples.render_sphere --width 640 --height 480
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sphere above a floor plane.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1280,
        help="Image width in pixels (default: 1280)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=720,
        help="Image height in pixels (default: 720)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="sphere.png",
        help="Output file path (default: sphere.png)",
    )
    parser.add_argument(
        "--no-floor",
        action="store_true",
        help="Render the sphere alone",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_sphere(
    width: int = 1280,
    height: int = 720,
    output_path: str = "sphere.png",
    floor: bool = True,
    quiet: bool = False,
) -> Path:
    """Render the sphere scene and save it to a PNG file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (PNG).
        floor: If True, add a floor plane below the sphere.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.tracer.camera.pinhole import PinholeCamera, setup_camera
    from src.tracer.core.integrator import get_image_numpy, render_image, setup_render_target
    from src.tracer.preview.export import save_png
    from src.tracer.scene.manager import SceneManager

    if not quiet:
        print(f"Creating sphere scene ({width}x{height})...")

    scene = SceneManager()
    scene.add_sphere(center=(0.0, 0.0, 5.0), radius=0.5, color=(1.0, 0.0, 0.0))
    if floor:
        scene.add_plane(normal=(0.0, 1.0, 0.0), distance=-1.0, color=(0.2, 0.2, 0.2))

    setup_camera(PinholeCamera(), width, height)
    setup_render_target(width, height)

    start_time = time.time()
    render_image()

    output_file = Path(output_path)
    save_png(get_image_numpy(), str(output_file))

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    ti.init(arch=ti.cpu, default_fp=ti.f64)

    try:
        render_sphere(
            width=args.width,
            height=args.height,
            output_path=args.output,
            floor=not args.no_floor,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
