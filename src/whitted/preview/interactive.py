"""Live preview of a render in a Taichi GGUI window.

The window is refreshed after every chunk of rows, so the image fills in from
top to bottom while the tracer runs. When the last chunk is done the finished
image stays up until the user closes the window.

Features:
    - One chunk rendered per displayed frame
    - Accepts encoded RGBA uint8 images or display-ready float RGB images
    - Headless detection, so callers can fall back to PNG output

Example:
    >>> from whitted.core.progressive import ProgressiveRenderer
    >>> from whitted.preview.interactive import InteractivePreview
    >>>
    >>> renderer = ProgressiveRenderer(scene, camera)
    >>> preview = InteractivePreview(renderer.width, renderer.height)
    >>> preview.run_progressive(renderer)
"""

from __future__ import annotations

import logging
import os
import platform
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

if TYPE_CHECKING:
    import numpy.typing as npt

    from whitted.core.progressive import ProgressiveRenderer

logger = logging.getLogger(__name__)


class InteractivePreview:
    """GGUI window showing a (possibly partial) render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        display_image: RGB float field uploaded to the canvas, indexed (x, y)
            with y = 0 at the bottom.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str = "Whitted Ray Tracer - Preview",
    ) -> None:
        """Allocate the display field; the window itself opens on first use.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            title: Window title.

        Note:
            ti.init() must have been called before construction.
        """
        self.width = width
        self.height = height
        self.title = title

        self._gui_window: ti.ui.Window | None = None
        self._gui_canvas: ti.ui.Canvas | None = None

        self.display_image = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

    def _open(self) -> None:
        if self._gui_window is None:
            self._gui_window = ti.ui.Window(name=self.title, res=(self.width, self.height), vsync=True)
            self._gui_canvas = self._gui_window.get_canvas()

    @property
    def window(self) -> ti.ui.Window:
        """The GGUI window (opened lazily)."""
        self._open()
        assert self._gui_window is not None
        return self._gui_window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """The window's canvas (opened lazily)."""
        self._open()
        assert self._gui_canvas is not None
        return self._gui_canvas

    def update_image(self, image: npt.NDArray[np.generic]) -> None:
        """Copy an image into the display field.

        Args:
            image: Array of shape (height, width, 3) or (height, width, 4),
                top row first. uint8 data is scaled to [0, 1]; float data is
                taken as already display-ready. Any alpha channel is dropped.

        Raises:
            ValueError: If the image size does not match the preview.
        """
        if image.ndim != 3 or image.shape[:2] != (self.height, self.width) or image.shape[2] not in (3, 4):
            raise ValueError(
                f"Preview is {self.width}x{self.height}, got an image of shape {image.shape}"
            )

        rgb = image[:, :, :3]
        if rgb.dtype == np.uint8:
            rgb = rgb.astype(np.float32) / 255.0

        # Rows run top-down in the array but the field's y axis points up
        columns = np.transpose(rgb[::-1], (1, 0, 2))
        self.display_image.from_numpy(np.ascontiguousarray(columns, dtype=np.float32))

    def is_running(self) -> bool:
        """False once the user has closed the window."""
        return self.window.running

    def show_frame(self) -> None:
        """Draw the display field and present it."""
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run_progressive(self, renderer: ProgressiveRenderer) -> None:
        """Drive a renderer one chunk per frame until the window is closed.

        Args:
            renderer: Renderer whose image size matches the preview.
        """
        self._open()

        while self.is_running():
            if not renderer.is_complete:
                renderer.render_chunk()
                self.update_image(renderer.get_image_uint8())
                if renderer.is_complete:
                    logger.info("Preview render finished (%dx%d)", renderer.width, renderer.height)
            self.show_frame()

    def close(self) -> None:
        """Ask the window to close; no-op if it was never opened."""
        if self._gui_window is not None:
            self._gui_window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Guess whether a GUI window can be opened.

        Returns:
            False in headless sessions (no X11/Wayland display on Linux, or
            an SSH session without X forwarding on macOS).
        """
        if os.name == "nt":
            return True

        has_display = bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))
        if platform.system() == "Darwin":
            # The native window server is reachable unless we came in over SSH
            return has_display or "SSH_CONNECTION" not in os.environ
        return has_display
