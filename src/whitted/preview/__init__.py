"""Preview module for output and visualization.

This module handles rendering output and interactive preview:

Components:
    encode: Pixel encoder (exposure, clamp, 2.2 gamma) as a Taichi kernel
    display: Matplotlib-based preview display
    export: PNG export via Pillow
    interactive: Taichi GGUI-based progressive preview window

Example:
    >>> from whitted.preview import save_png, show_preview
    >>> from whitted.core.progressive import ProgressiveRenderer
    >>>
    >>> renderer = ProgressiveRenderer(scene, camera)
    >>> renderer.render()
    >>> show_preview(renderer)
    >>> save_png(renderer, "output.png")
"""

from whitted.preview.display import show_image, show_preview
from whitted.preview.encode import encode_channel, encode_color, encode_image
from whitted.preview.export import save_png, save_png_from_array
from whitted.preview.interactive import InteractivePreview

__all__ = [
    # Encoder
    "encode_channel",
    "encode_color",
    "encode_image",
    # Interactive preview
    "InteractivePreview",
    # Display functions
    "show_preview",
    "show_image",
    # Export functions
    "save_png",
    "save_png_from_array",
]
