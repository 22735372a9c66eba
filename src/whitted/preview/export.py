"""Write rendered radiance to image files.

Images go through the same pixel encoder as the previews
(exposure, clamp, 2.2 gamma) before they are written.

Supported formats:
    - PNG (8-bit RGBA via Pillow)

Example:
    >>> from whitted.preview.export import save_png
    >>> from whitted.core.progressive import ProgressiveRenderer
    >>>
    >>> renderer = ProgressiveRenderer(scene, camera)
    >>> renderer.render()
    >>> save_png(renderer, "output.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.preview.encode import encode_image

if TYPE_CHECKING:
    from whitted.core.progressive import ProgressiveRenderer


def save_png(
    renderer: ProgressiveRenderer,
    filepath: str,
    *,
    exposure: float | None = None,
) -> None:
    """Encode a renderer's image and write it as PNG.

    Args:
        renderer: Renderer to read the image and default exposure from.
        filepath: Destination path, normally ending in .png.
        exposure: Exposure override (default: the renderer's config.exposure).
    """
    if exposure is None:
        exposure = renderer.config.exposure
    save_png_from_array(renderer.get_image_numpy(), filepath, exposure=exposure)


def save_png_from_array(
    image: npt.NDArray[np.floating[Any]],
    filepath: str,
    *,
    exposure: float = 1.0,
) -> None:
    """Save a linear radiance array as a PNG file.

    Args:
        image: Linear radiance array of shape (H, W, 3).
        filepath: Destination path, normally ending in .png.
        exposure: Exposure multiplier (default 1.0).
    """
    pixels = encode_image(image, exposure)

    # Save using Pillow; (H, W, 4) uint8 is inferred as RGBA
    pil_image = PILImage.fromarray(pixels)
    pil_image.save(filepath)
