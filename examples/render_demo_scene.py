#!/usr/bin/env python3
"""Render the demo scene.

This script renders the demo scene end to end with the Whitted ray tracer.
It builds the scene and camera, renders the image a chunk of rows at a time,
and writes the encoded result to a PNG file.

Usage:
    python examples/render_demo_scene.py [options]

Options:
    --width WIDTH           Image width in pixels (default: 320)
    --height HEIGHT         Image height in pixels (default: 240)
    --max-depth DEPTH       Maximum reflection/refraction depth (default: 5)
    --exposure EXPOSURE     Exposure multiplier (default: 1.0)
    --light-samples N       Area light grid resolution (default: 4)
    --chunk-size ROWS       Rows per progress update (default: 10)
    --output OUTPUT         Output file path (default: demo_scene.png)
    --preview               Show the image in a Matplotlib window when done
    --quiet                 Suppress progress output
    --verbose               Enable debug logging

Example:
    python examples/render_demo_scene.py --width 160 --height 120 --max-depth 3
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=320, help="Image width in pixels (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Image height in pixels (default: 240)")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=5,
        help="Maximum reflection/refraction depth (default: 5)",
    )
    parser.add_argument("--exposure", type=float, default=1.0, help="Exposure multiplier (default: 1.0)")
    parser.add_argument(
        "--light-samples",
        type=int,
        default=4,
        help="Area light grid resolution, N x N point lights (default: 4)",
    )
    parser.add_argument("--chunk-size", type=int, default=10, help="Rows per progress update (default: 10)")
    parser.add_argument(
        "--output",
        type=str,
        default="demo_scene.png",
        help="Output file path (default: demo_scene.png)",
    )
    parser.add_argument("--preview", action="store_true", help="Show the image when done")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def render_demo_scene(
    width: int = 320,
    height: int = 240,
    max_depth: int = 5,
    exposure: float = 1.0,
    light_samples: int = 4,
    chunk_size: int = 10,
    output_path: str = "demo_scene.png",
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Build, trace and write the demo scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        max_depth: Maximum reflection/refraction depth.
        exposure: Exposure multiplier applied by the encoder.
        light_samples: Area light grid resolution.
        chunk_size: Number of rows rendered between progress updates.
        output_path: Where to write the PNG.
        preview: If True, show the image in a Matplotlib window.
        quiet: Print nothing while rendering.

    Returns:
        Path of the written PNG.
    """
    # Imported here so ti.init() in main() runs first
    from whitted.core.progressive import ProgressiveRenderer
    from whitted.preview.export import save_png
    from whitted.scene.demo import DemoSceneParams, create_demo_scene
    from whitted.scene.manager import RenderConfig

    config = RenderConfig(
        width=width,
        height=height,
        max_depth=max_depth,
        exposure=exposure,
        chunk_size=chunk_size,
    )
    params = DemoSceneParams(aspect_ratio=config.aspect_ratio, area_light_samples=light_samples)

    if not quiet:
        print(f"Creating demo scene ({width}x{height}, {light_samples}x{light_samples} area light)...")

    scene, camera = create_demo_scene(params)
    renderer = ProgressiveRenderer(scene, camera, config)

    if not quiet:
        print(f"Tracing {len(scene.primitives)} primitives, {len(scene.lights)} lights, depth {max_depth}...")

    started = time.perf_counter()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            elapsed = time.perf_counter() - started
            progress_pct = (done / total) * 100 if total > 0 else 0
            rows_per_sec = done / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {done}/{total} rows ({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    renderer.render(callback=progress_callback)

    if not quiet:
        print()

    png_path = Path(output_path)
    save_png(renderer, str(png_path))

    if not quiet:
        print(f"Wrote {png_path.resolve()} in {time.perf_counter() - started:.2f}s")

    if preview:
        from whitted.preview.display import show_preview

        show_preview(renderer)

    return png_path


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    # The encoder kernel runs fine on the CPU backend
    ti.init(arch=ti.cpu)

    try:
        render_demo_scene(
            width=args.width,
            height=args.height,
            max_depth=args.max_depth,
            exposure=args.exposure,
            light_samples=args.light_samples,
            chunk_size=args.chunk_size,
            output_path=args.output,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except ValueError as exc:
        print(f"render_demo_scene: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
