"""Progressive renderer that fills the image a chunk of rows at a time.

This module drives the tracer over the whole image:
- One primary ray per pixel, through the pixel's lower-left corner
- Rows rendered top to bottom, ``chunk_size`` rows per step
- Progress callbacks and a generator API so a UI can show partial images
- Easy reset and re-render

The linear radiance is kept in a float film buffer; exposure, clamping and
gamma are applied only when the image is encoded for display or export.

Example:
    >>> from whitted.core.progressive import ProgressiveRenderer
    >>> from whitted.scene.demo import create_demo_scene
    >>> from whitted.scene.manager import RenderConfig
    >>>
    >>> scene, camera = create_demo_scene()
    >>> renderer = ProgressiveRenderer(scene, camera, RenderConfig(width=160, height=120))
    >>> renderer.render()
    >>> pixels = renderer.get_image_uint8()  # (120, 160, 4) RGBA
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from whitted.core.tracer import Tracer
from whitted.scene.manager import RenderConfig

if TYPE_CHECKING:
    from whitted.camera.pinhole import PinholeCamera
    from whitted.core.ray import Vector
    from whitted.scene.scene import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """A renderer that traces the image in chunks of rows.

    The film buffer is stored top row first, shape (height, width, 3), which
    is the layout image libraries expect.

    Attributes:
        scene: The scene being rendered.
        camera: The camera generating primary rays.
        config: The render configuration.
        tracer: The Whitted tracer bound to the scene.
    """

    def __init__(
        self,
        scene: Scene,
        camera: PinholeCamera,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize the progressive renderer.

        Args:
            scene: The scene to render.
            camera: Camera providing get_camera_ray(x, y).
            config: Render settings. Defaults to RenderConfig().
        """
        self.scene = scene
        self.camera = camera
        self.config = config if config is not None else RenderConfig()
        self.tracer = Tracer(scene, max_depth=self.config.max_depth)
        self._film = np.zeros((self.height, self.width, 3), dtype=np.float64)
        self._next_row = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.config.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.config.height

    @property
    def rows_completed(self) -> int:
        """Get the number of rows rendered so far."""
        return self._next_row

    @property
    def is_complete(self) -> bool:
        """True once every row has been rendered."""
        return self._next_row >= self.height

    def reset(self) -> None:
        """Clear the film and restart from the top row."""
        self._film.fill(0.0)
        self._next_row = 0

    def render_pixel(self, i: int, j: int) -> Vector:
        """Trace the primary ray of one pixel.

        Args:
            i: Pixel column (0 = left).
            j: Pixel row (0 = top).

        Returns:
            Linear RGB radiance for the pixel.
        """
        x = i / self.width
        y = (self.height - 1 - j) / self.height
        return self.tracer.trace(self.camera.get_camera_ray(x, y))

    def render_chunk(self) -> int:
        """Render the next chunk of rows.

        Returns:
            The number of rows rendered (0 when the image is complete).
        """
        start = self._next_row
        stop = min(start + self.config.chunk_size, self.height)
        for j in range(start, stop):
            for i in range(self.width):
                self._film[j, i] = self.render_pixel(i, j)
        self._next_row = stop
        logger.debug("Rendered rows %d-%d of %d", start, stop - 1, self.height)
        return stop - start

    def render(self, callback: ProgressCallback | None = None) -> None:
        """Render all remaining rows, with an optional progress callback.

        Args:
            callback: Optional function called after each chunk with
                (rows_completed, total_rows).

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> renderer.render(callback=progress)
        """
        for done, total in self.render_progressive():
            if callback is not None:
                callback(done, total)

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render remaining rows, yielding progress after each chunk.

        This is a generator-based alternative to render() with callbacks,
        useful for updating a preview between chunks. Stopping iteration
        leaves the renderer ready to resume from the next chunk.

        Yields:
            Tuple of (rows_completed, total_rows).
        """
        if self.is_complete:
            return

        start_time = time.perf_counter()
        while not self.is_complete:
            self.render_chunk()
            yield (self._next_row, self.height)

        logger.info(
            "Rendered %dx%d image in %.2fs",
            self.width,
            self.height,
            time.perf_counter() - start_time,
        )

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the linear radiance image.

        Returns:
            NumPy array of shape (height, width, 3) with dtype float32.
            Rows not rendered yet are black.
        """
        return self._film.astype(np.float32)

    def get_image_uint8(self, exposure: float | None = None) -> npt.NDArray[np.uint8]:
        """Get the display-ready RGBA image.

        Applies exposure, clamping and 2.2 gamma via the pixel encoder.

        Args:
            exposure: Exposure override. Defaults to config.exposure.

        Returns:
            NumPy array of shape (height, width, 4) with dtype uint8.
        """
        from whitted.preview.encode import encode_image

        if exposure is None:
            exposure = self.config.exposure
        return encode_image(self.get_image_numpy(), exposure)

    def save_image(self, filepath: str) -> None:
        """Save the encoded image to a file (format chosen by extension).

        Args:
            filepath: Path to save the image (e.g., "output.png").
        """
        from whitted.preview.export import save_png_from_array

        save_png_from_array(self.get_image_numpy(), filepath, exposure=self.config.exposure)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"rows={self.rows_completed})"
        )
