"""Interactive preview window using Taichi GGUI.

This module provides the real-time frame loop: every iteration drains the
window's key events, applies them to the camera, renders one frame and
shows it.

Controls:
    - Escape: quit
    - Space: toggle between perspective and orthographic projection
    - Up / Down: vertical field of view +/- 1 degree
    - Right / Left: horizontal field of view +/- 1 degree

Closing the window ends the loop the same way as Escape.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from raycaster.preview.interactive import InteractivePreview
    >>> from raycaster.scene.demo import create_default_scene
    >>>
    >>> scene, camera = create_default_scene()
    >>> preview = InteractivePreview(640, 480, camera)
    >>> preview.run()  # Blocks until the window is closed
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti
from loguru import logger

from raycaster.camera.controls import InputEvent, apply_event
from raycaster.camera.projection import Camera
from raycaster.core.renderer import FrameRenderer

if TYPE_CHECKING:
    import numpy.typing as npt


_KEY_EVENTS: dict[str, InputEvent] = {
    ti.ui.ESCAPE: InputEvent.ESCAPE,
    ti.ui.SPACE: InputEvent.TOGGLE_PROJECTION,
    ti.ui.UP: InputEvent.FOVY_UP,
    ti.ui.DOWN: InputEvent.FOVY_DOWN,
    ti.ui.RIGHT: InputEvent.FOVX_UP,
    ti.ui.LEFT: InputEvent.FOVX_DOWN,
}


def event_for_key(key: str) -> InputEvent | None:
    """Map a GGUI key name to an input event.

    Args:
        key: Key name as reported by ``ti.ui.Window.get_events()``.

    Returns:
        The matching InputEvent, or None for keys with no binding.
    """
    return _KEY_EVENTS.get(key)


class InteractivePreview:
    """Interactive preview window using Taichi GGUI.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        camera: Camera mutated by keyboard input.
        display_image: Taichi field storing the display image (RGB float).
    """

    def __init__(
        self,
        width: int,
        height: int,
        camera: Camera,
        *,
        title: str = "Ray Caster - Interactive Preview",
        renderer: FrameRenderer | None = None,
    ) -> None:
        """Initialize the preview.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            camera: Initial camera state.
            title: Window title.
            renderer: Renderer to draw frames with. One matching the window
                size is created if None.

        Note:
            The window itself is created lazily on first use so that
            headless environments can construct the preview and check
            is_display_available() first.
        """
        self.width = width
        self.height = height
        self.camera = camera
        self._title = title
        self._is_initialized = False
        self._stop_requested = False

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        self._renderer = renderer if renderer is not None else FrameRenderer(width, height)

        # Shape is (width, height) for Taichi field, RGB values stored as vec3
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    def _initialize_window(self) -> None:
        if self._is_initialized:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()
        self._is_initialized = True

    @property
    def window(self) -> ti.ui.Window:
        """Get the Taichi GGUI window, initializing if needed."""
        if self._window is None:
            self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Get the canvas for rendering."""
        if self._canvas is None:
            self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    @property
    def renderer(self) -> FrameRenderer:
        return self._renderer

    def update_image(self, image: npt.NDArray[np.uint8]) -> None:
        """Update the display image from a rendered frame.

        Args:
            image: Array of shape (height, width, 4) or (height, width, 3)
                with 0-255 channel values, top row first.

        Raises:
            ValueError: If the image size doesn't match the window.
        """
        if image.shape[:2] != (self.height, self.width) or image.shape[2] not in (3, 4):
            raise ValueError(
                f"Image shape {image.shape} doesn't match expected "
                f"({self.height}, {self.width}, 3|4)"
            )

        rgb = image[:, :, :3].astype(np.float32) / 255.0

        # NumPy images are (height, width) with the top row first; the field
        # is (x, y) with y growing upward
        image_transposed = np.ascontiguousarray(np.transpose(np.flipud(rgb), (1, 0, 2)))
        self.display_image.from_numpy(image_transposed)

    def poll_events(self) -> list[InputEvent]:
        """Drain pending key presses and translate them to input events.

        A closed window is reported as QUIT.
        """
        events: list[InputEvent] = []
        for key_event in self.window.get_events(ti.ui.PRESS):
            event = event_for_key(key_event.key)
            if event is not None:
                events.append(event)
        if not self.window.running:
            events.append(InputEvent.QUIT)
        return events

    def is_running(self) -> bool:
        """Check if the window is still open and no quit was requested."""
        return not self._stop_requested and self.window.running

    def show_frame(self) -> None:
        """Present the current display image."""
        self.canvas.set_image(self.display_image)
        self.window.show()

    def step(self) -> bool:
        """Run one loop iteration: input, render, present.

        Returns:
            False once a quit event has been received.
        """
        for event in self.poll_events():
            if not apply_event(self.camera, event):
                logger.info("Quit requested ({})", event.value)
                self._stop_requested = True
                return False

        self._renderer.render(self.camera)
        self.update_image(self._renderer.get_image_numpy())
        self.show_frame()
        return True

    def run(self) -> int:
        """Run the frame loop until the window is closed or Escape is pressed.

        Returns:
            The number of frames rendered.
        """
        self._initialize_window()
        logger.info("Starting preview loop at {}x{}", self.width, self.height)

        while self.is_running():
            if not self.step():
                break

        self.close()
        logger.info("Preview closed after {} frames", self._renderer.frame_count)
        return self._renderer.frame_count

    def close(self) -> None:
        """Close the preview window.

        After calling this, the window cannot be reopened.
        """
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        return is_display_available()


def is_display_available() -> bool:
    """Check if a display is available for GUI rendering.

    Returns:
        True if a display is available, False for headless environments.
    """
    display = os.environ.get("DISPLAY")
    wayland = os.environ.get("WAYLAND_DISPLAY")

    if os.name == "nt":
        return True

    # On macOS, display is always available unless in SSH without X forwarding
    if os.uname().sysname == "Darwin":
        ssh_connection = os.environ.get("SSH_CONNECTION")
        if ssh_connection and not display:
            return False
        return True

    return bool(display or wayland)
