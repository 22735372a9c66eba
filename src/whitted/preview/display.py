"""Show encoded renders in a Matplotlib figure.

Example:
    >>> from whitted.preview.display import show_preview
    >>> from whitted.core.progressive import ProgressiveRenderer
    >>>
    >>> renderer = ProgressiveRenderer(scene, camera)
    >>> renderer.render()
    >>> show_preview(renderer)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from whitted.preview.encode import encode_image

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

    from whitted.core.progressive import ProgressiveRenderer


def show_image(
    image: npt.NDArray[np.floating[Any]],
    *,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a linear radiance image in a Matplotlib figure.

    Args:
        image: Linear radiance array of shape (H, W, 3).
        exposure: Exposure multiplier applied by the encoder.
        title: Optional figure title.
        figsize: Matplotlib figure size in inches.
        block: Wait for the figure window to be closed before returning.
    """
    import matplotlib.pyplot as plt

    pixels = encode_image(image, exposure)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(pixels)
    ax.axis("off")
    if title is not None:
        ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)


def show_preview(
    renderer: ProgressiveRenderer,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display the renderer's current image.

    The default title shows how many rows have been rendered.

    Args:
        renderer: Renderer whose current image (complete or not) is shown.
        title: Custom title.
        figsize: Matplotlib figure size in inches.
        block: Wait for the figure window to be closed before returning.
    """
    if title is None:
        title = f"Render Preview - {renderer.rows_completed}/{renderer.height} rows"

    show_image(
        renderer.get_image_numpy(),
        exposure=renderer.config.exposure,
        title=title,
        figsize=figsize,
        block=block,
    )
