"""Pixel encoder: linear radiance to display-ready 8-bit RGBA.

Every channel goes through the same pipeline:

    out = round(clamp(value * exposure, 0, 1) ^ (1 / 2.2) * 255)

and alpha is always 255. This is the only place where floating-point
radiance turns into integers.

Two entry points are provided:
    - encode_color: a single color, pure Python (used for spot checks)
    - encode_image: a whole (H, W, 3) image, run as a Taichi kernel

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> import numpy as np
    >>> from whitted.preview.encode import encode_color, encode_image
    >>> encode_color((1.0, 0.5, 0.0))
    (255, 186, 0, 255)
    >>> encode_image(np.ones((2, 2, 3), dtype=np.float32)).shape
    (2, 2, 4)
"""

import math
from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from whitted.core.ray import VectorLike, as_vec3

# Display gamma
GAMMA = 2.2

# Alpha channel value, always fully opaque
ALPHA = 255


def encode_channel(value: float, exposure: float = 1.0) -> int:
    """Encode one linear channel value as an 8-bit integer.

    Args:
        value: Linear radiance.
        exposure: Scalar multiplier applied before clamping.

    Returns:
        An integer in [0, 255].
    """
    v = min(max(value * exposure, 0.0), 1.0)
    return int(math.floor(v ** (1.0 / GAMMA) * 255.0 + 0.5))


def encode_color(color: VectorLike, exposure: float = 1.0) -> tuple[int, int, int, int]:
    """Encode a linear RGB color as an 8-bit RGBA tuple."""
    r, g, b = as_vec3(color).tolist()
    return (
        encode_channel(r, exposure),
        encode_channel(g, exposure),
        encode_channel(b, exposure),
        ALPHA,
    )


# Lazy kernel holder - kernel is created on first use after Taichi is initialized
_encode_kernel: Any = None


def _get_encode_kernel() -> Any:
    """Get or create the image encoding kernel."""
    global _encode_kernel
    if _encode_kernel is None:

        @ti.kernel
        def _kernel(
            radiance: ti.types.ndarray(dtype=ti.f32, ndim=3),
            pixels: ti.types.ndarray(dtype=ti.u8, ndim=3),
            exposure: ti.f32,
        ):
            for j, i in ti.ndrange(radiance.shape[0], radiance.shape[1]):
                for c in ti.static(range(3)):
                    value = tm.clamp(radiance[j, i, c] * exposure, 0.0, 1.0)
                    encoded = ti.floor(value ** (1.0 / GAMMA) * 255.0 + 0.5)
                    pixels[j, i, c] = ti.cast(encoded, ti.u8)
                pixels[j, i, 3] = ti.cast(ALPHA, ti.u8)

        _encode_kernel = _kernel
    return _encode_kernel


def encode_image(
    image: npt.NDArray[np.floating[Any]],
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Encode a linear radiance image as 8-bit RGBA.

    Requires Taichi to be initialized (ti.init) before the first call.

    Args:
        image: Linear image array of shape (H, W, 3).
        exposure: Scalar multiplier applied before clamping.

    Returns:
        Array of shape (H, W, 4) with dtype uint8.

    Raises:
        ValueError: If the image is not of shape (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")

    radiance = np.ascontiguousarray(image, dtype=np.float32)
    pixels = np.zeros((image.shape[0], image.shape[1], 4), dtype=np.uint8)
    _get_encode_kernel()(radiance, pixels, float(exposure))
    return pixels
