#!/usr/bin/env python3
"""Render a hexagon built from grouped spheres and cylinders.

Each side of the hexagon is a group holding a corner sphere and an edge
cylinder; six rotated copies of a side form the hexagon, which is itself a
group tilted toward the camera. The scene exercises nested group transforms,
group bounds and the threaded render loop.

Usage:
    python -m examples.render_hexagon [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 200)
    --workers N         Render threads (default: executor default)
    --output OUTPUT     Output file path, .ppm or .png (default: hexagon.png)
    --tone-map METHOD   Tone mapping for PNG/preview (default: none)
    --gamma GAMMA       Gamma for PNG/preview (default: 1.0)
    --show              Open a Matplotlib preview after rendering
    --quiet             Suppress progress output

Example:
    python -m examples.render_hexagon --width 200 --height 100 --output hexagon.ppm
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from pathlib import Path

from src.prism.camera import Camera
from src.prism.config import TONE_MAP_METHODS, RenderSettings, setup_logging
from src.prism.core import Axis, Matrix, point, vector
from src.prism.geometry import Cylinder, Group, Shape, Sphere
from src.prism.materials import PointLight
from src.prism.preview import save_png, save_ppm, show_preview
from src.prism.scene.world import World

LIGHT_POSITION = (-8.0, 10.0, -10.0)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a hexagon of grouped spheres and cylinders.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=200,
        help="Image height in pixels (default: 200)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Render threads (default: executor default)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="hexagon.png",
        help="Output file path, .ppm or .png (default: hexagon.png)",
    )
    parser.add_argument(
        "--tone-map",
        choices=TONE_MAP_METHODS,
        default="none",
        help="Tone mapping for PNG output and preview (default: none)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma for PNG output and preview (default: 1.0)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open a Matplotlib preview after rendering",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


# =============================================================================
# Scene
# =============================================================================


def hexagon_corner() -> Shape:
    return Sphere(Matrix.scaling(0.25, 0.25, 0.25).translate(0.0, 0.0, -1.0))


def hexagon_edge() -> Shape:
    transform = (
        Matrix.scaling(0.25, 1.0, 0.25)
        .rotate(Axis.Z, -math.pi / 2.0)
        .rotate(Axis.Y, -math.pi / 6.0)
        .translate(0.0, 0.0, -1.0)
    )
    return Cylinder(transform, minimum=0.0, maximum=1.0)


def hexagon_side(transform: Matrix) -> Group:
    return Group(transform, [hexagon_corner(), hexagon_edge()])


def hexagon() -> Group:
    """Six sides rotated about y, tilted toward the camera."""
    sides = [hexagon_side(Matrix.rotation(Axis.Y, n * math.pi / 3.0)) for n in range(6)]
    transform = (
        Matrix.rotation(Axis.X, -math.pi / 6.0)
        .rotate(Axis.Y, math.pi / 6.0)
        .translate(-0.35, 1.0, 0.0)
    )
    return Group(transform, sides)


def build_world() -> World:
    return World(PointLight.new(LIGHT_POSITION), [hexagon()])


def build_camera(settings: RenderSettings) -> Camera:
    view = Matrix.view_transform(point(0.0, 1.5, -5.0), point(0.0, 1.0, 0.0), vector(0.0, 1.0, 0.0))
    return Camera(settings.width, settings.height, settings.field_of_view, view)


# =============================================================================
# Rendering
# =============================================================================


def render_hexagon(settings: RenderSettings, *, show: bool = False, quiet: bool = False) -> Path:
    """Render the hexagon scene and save it.

    Args:
        settings: Image size, threads, output and display options.
        show: If True, open a preview window once the image is saved.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    if not quiet:
        print(f"Creating hexagon scene ({settings.width}x{settings.height})...")

    world = build_world()
    camera = build_camera(settings)

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        if not quiet:
            progress_pct = (current / total) * 100 if total > 0 else 0
            print(f"\r  Progress: {current}/{total} rows ({progress_pct:.1f}%)", end="", flush=True)

    canvas = camera.render(world, workers=settings.workers, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = settings.output
    if output_file.suffix.lower() == ".ppm":
        save_ppm(canvas, output_file)
    else:
        save_png(
            canvas,
            output_file,
            tone_map=settings.tone_map,
            gamma=settings.gamma,
            exposure=settings.exposure,
        )

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if show:
        show_preview(canvas, tone_map=settings.tone_map, gamma=settings.gamma, title="Hexagon")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging("WARNING" if args.quiet else "INFO")

    try:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            workers=args.workers,
            output=Path(args.output),
            tone_map=args.tone_map,
            gamma=args.gamma,
        )
        render_hexagon(settings, show=args.show, quiet=args.quiet)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
