#!/usr/bin/env python3
"""Interactive demo scene renderer.

This script opens a Taichi GGUI window and renders the demo scene into it
progressively, one chunk of rows per frame. The finished image stays on
screen until the window is closed; pass --output to also save it as PNG.

Usage:
    python examples/interactive_demo_scene.py [--width W] [--height H] [--output FILE]
"""

from __future__ import annotations

import argparse
import logging
import sys

import taichi as ti


def main() -> int:
    """Main entry point for the interactive renderer.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = argparse.ArgumentParser(description="Interactive Whitted ray tracer preview.")
    parser.add_argument("--width", type=int, default=320)
    parser.add_argument("--height", type=int, default=240)
    parser.add_argument("--max-depth", type=int, default=5)
    parser.add_argument("--chunk-size", type=int, default=4)
    parser.add_argument("--output", type=str, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    # Initialize Taichi first (before creating fields and kernels)
    ti.init(arch=ti.cpu)

    from whitted.core.progressive import ProgressiveRenderer
    from whitted.preview.interactive import InteractivePreview
    from whitted.scene.demo import DemoSceneParams, create_demo_scene
    from whitted.scene.manager import RenderConfig

    if not InteractivePreview.is_display_available():
        print("No display available; use render_demo_scene.py instead.", file=sys.stderr)
        return 1

    config = RenderConfig(
        width=args.width,
        height=args.height,
        max_depth=args.max_depth,
        chunk_size=args.chunk_size,
    )
    scene, camera = create_demo_scene(DemoSceneParams(aspect_ratio=config.aspect_ratio))
    renderer = ProgressiveRenderer(scene, camera, config)

    preview = InteractivePreview(config.width, config.height, title="Whitted Ray Tracer - Demo Scene")
    preview.run_progressive(renderer)

    if args.output is not None and renderer.is_complete:
        renderer.save_image(args.output)
        print(f"Saved to: {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
