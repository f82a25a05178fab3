"""Frame renderer: one primary ray per pixel, one frame per call.

This module owns the framebuffer and the sweep kernel. A frame is rendered by:

1. Uploading the camera state (the camera may have changed since the last
   frame through interactive input).
2. Running a single kernel over ``ti.ndrange(width, height)``. For each pixel
   the camera produces a ray, the scene resolver finds the nearest hit and
   the shader turns it into an RGBA color written to that pixel's cell.

Each pixel depends only on the camera and the scene, both read-only during
the kernel, and owns a distinct framebuffer cell, so Taichi runs the
outermost loop in parallel without any synchronization.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.camera.projection import Camera
    >>> from raycaster.core.renderer import FrameRenderer
    >>> from raycaster.scene.demo import create_default_scene
    >>>
    >>> scene, camera = create_default_scene()
    >>> renderer = FrameRenderer(640, 480)
    >>> renderer.render(camera)
    >>> image = renderer.get_image_numpy()  # (480, 640, 4) uint8
"""

from collections.abc import Sequence
from typing import Protocol

import numpy as np
import numpy.typing as npt
import taichi as ti
from loguru import logger

from raycaster.camera.projection import Camera, get_camera_origin, get_ray, setup_camera
from raycaster.core.shading import DEFAULT_BACKGROUND, set_background_color, shade
from raycaster.materials.flat import color4
from raycaster.scene.intersection import intersect_scene

# =============================================================================
# Render Target (Framebuffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# RGBA framebuffer, indexed (x, y) with y growing upward
_frame_buffer = ti.Vector.field(4, dtype=ti.i32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the framebuffer for the given frame size.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If a dimension is not positive or exceeds the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1
    clear_render_target()


def clear_render_target() -> None:
    """Clear the framebuffer to zero."""
    _frame_buffer.fill(0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.func
def trace_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> color4:
    """Cast the primary ray through a pixel and shade the nearest hit."""
    ray = get_ray(pixel_i, pixel_j, width, height)
    record = intersect_scene(ray.origin, ray.direction)
    return shade(ray, record, get_camera_origin())


@ti.kernel
def _render_frame(width: ti.i32, height: ti.i32):
    for i, j in ti.ndrange(width, height):
        _frame_buffer[i, j] = trace_pixel(i, j, width, height)


@ti.kernel
def _render_single_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> color4:
    result = color4(0, 0, 0, 0)
    # Serial single-iteration outer loop keeps the object loop nested
    ti.loop_config(serialize=True)
    for _ in range(1):
        result = trace_pixel(pixel_i, pixel_j, width, height)
    return result


def render_frame() -> None:
    """Render every pixel of the current render target once.

    Uses the camera state last uploaded with setup_camera().

    Raises:
        RuntimeError: If the render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    _render_frame(width, height)


def render_pixel(pixel_i: int, pixel_j: int) -> tuple[int, int, int, int]:
    """Render a single pixel from Python and return its RGBA color.

    Does not write to the framebuffer. Intended for tests and debugging.

    Raises:
        RuntimeError: If the render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    c = _render_single_pixel(pixel_i, pixel_j, width, height)
    return (int(c[0]), int(c[1]), int(c[2]), int(c[3]))


def get_frame_numpy() -> npt.NDArray[np.uint8]:
    """Get the framebuffer as an 8-bit RGBA image.

    Returns:
        NumPy array of shape (height, width, 4), row 0 at the top.

    Raises:
        RuntimeError: If the render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()

    full_image = _frame_buffer.to_numpy()
    image = full_image[:width, :height, :]

    # Transpose from (width, height, 4) to (height, width, 4) for standard image format
    image = np.transpose(image, (1, 0, 2))

    # Flip vertically (Taichi uses bottom-left origin, images use top-left)
    image = np.flipud(image)

    return np.clip(image, 0, 255).astype(np.uint8)


# =============================================================================
# Frame Sink Protocol
# =============================================================================


class FrameSink(Protocol):
    """Destination for a rendered frame, written pixel by pixel."""

    def put_pixel(self, x: int, y: int, color: tuple[int, int, int, int]) -> None: ...

    def present(self) -> None: ...


# =============================================================================
# FrameRenderer
# =============================================================================


class FrameRenderer:
    """Renders frames of the current scene for a fixed frame size.

    The camera is passed to every render() call rather than stored, so
    interactive changes made between frames are picked up without any
    extra bookkeeping.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: Sequence[int] = DEFAULT_BACKGROUND,
    ) -> None:
        """Initialize the renderer and its framebuffer.

        Args:
            width: Image width in pixels (max 2048).
            height: Image height in pixels (max 2048).
            background: Color for pixels that hit nothing.

        Raises:
            ValueError: If dimensions or background color are invalid.
        """
        self._width = width
        self._height = height
        self._frame_count = 0
        setup_render_target(width, height)
        set_background_color(background)
        logger.info("Render target ready: {}x{}", width, height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def frame_count(self) -> int:
        """Number of frames rendered so far."""
        return self._frame_count

    def render(self, camera: Camera) -> None:
        """Render one full frame as seen from the camera.

        Args:
            camera: Current camera state.

        Raises:
            ValueError: If the camera state is invalid.
        """
        setup_camera(camera)
        render_frame()
        self._frame_count += 1

    def get_image_numpy(self) -> npt.NDArray[np.uint8]:
        """Get the last frame as a (height, width, 4) uint8 array."""
        return get_frame_numpy()

    def present_to(self, sink: FrameSink) -> None:
        """Write every pixel of the last frame to a sink, then present.

        Pixels are addressed with a top-left origin, matching the image
        returned by get_image_numpy().
        """
        image = self.get_image_numpy()
        for y in range(self._height):
            for x in range(self._width):
                r, g, b, a = (int(c) for c in image[y, x])
                sink.put_pixel(x, y, (r, g, b, a))
        sink.present()

    def __repr__(self) -> str:
        return (
            f"FrameRenderer(width={self.width}, height={self.height}, "
            f"frames={self.frame_count})"
        )
