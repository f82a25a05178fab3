"""Camera model mapping pixels to primary rays.

This module implements a fixed-orientation camera with two projection modes:

- Orthographic: the pixel offset from the image center, scaled to [-0.5, 0.5),
  is added to the camera's forward vector and normalized. Every ray starts
  at the camera position, so this is a parallel-style projection rather than
  a true orthographic camera with per-pixel origins.
- Perspective: the pixel center is mapped to normalized device coordinates,
  then to screen space in [-1, 1], scaled by ``aspect * tan(fovx / 2)``
  horizontally and ``tan(fovy / 2)`` vertically, and placed at depth
  ``z = -1``. fovx and fovy are independent.

The perspective direction is used as a world-space direction directly. That
holds only because the camera never rotates; supporting rotation needs a
camera-to-world transform applied after normalization.

Pixel coordinates use a bottom-left origin (j grows upward), matching the
Taichi canvas.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.camera.projection import Camera, setup_camera, camera_ray
    >>>
    >>> camera = Camera(position=(0.0, 0.0, 0.0), fovx=60.0, fovy=60.0)
    >>> setup_camera(camera)
    >>> origin, direction = camera_ray(320, 240, 640, 480)
"""

import math
from dataclasses import dataclass
from enum import IntEnum

import taichi as ti
from loguru import logger

from raycaster.core.ray import Ray, make_ray
from raycaster.core.vector import Vector3, into_unit, vec3

# Field of view limits in degrees; tan(fov / 2) diverges at 180
MIN_FOV = 1.0
MAX_FOV = 179.0


class ProjectionMode(IntEnum):
    """Projection used to derive primary ray directions."""

    ORTHOGRAPHIC = 0
    PERSPECTIVE = 1


# =============================================================================
# Camera State (Python-side, mutated between frames)
# =============================================================================


@dataclass
class Camera:
    """Mutable camera state.

    Attributes:
        position: Camera position in world space (x, y, z).
        direction: Forward vector. Only the orthographic projection reads it;
            the perspective projection always looks down -z.
        fovx: Horizontal field of view in degrees.
        fovy: Vertical field of view in degrees.
        mode: Active projection mode. Starts in perspective.
    """

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    direction: tuple[float, float, float] = (0.0, 0.0, -1.0)
    fovx: float = 60.0
    fovy: float = 60.0
    mode: ProjectionMode = ProjectionMode.PERSPECTIVE

    def toggle_projection(self) -> ProjectionMode:
        """Flip between orthographic and perspective projection.

        Returns:
            The new projection mode.
        """
        if self.mode == ProjectionMode.PERSPECTIVE:
            self.mode = ProjectionMode.ORTHOGRAPHIC
        else:
            self.mode = ProjectionMode.PERSPECTIVE
        return self.mode

    def adjust_fovx(self, delta: float) -> float:
        """Change the horizontal FOV by delta degrees, clamped to [MIN_FOV, MAX_FOV]."""
        self.fovx = _clamp_fov(self.fovx + delta)
        return self.fovx

    def adjust_fovy(self, delta: float) -> float:
        """Change the vertical FOV by delta degrees, clamped to [MIN_FOV, MAX_FOV]."""
        self.fovy = _clamp_fov(self.fovy + delta)
        return self.fovy

    def validate(self) -> None:
        """Check that the camera can produce finite rays.

        Raises:
            ValueError: If the position or direction is not finite, or an FOV
                lies outside [MIN_FOV, MAX_FOV].
        """
        if not Vector3.from_iterable(self.position).is_finite():
            raise ValueError(f"Camera position {self.position} is not finite")
        if not Vector3.from_iterable(self.direction).is_finite():
            raise ValueError(f"Camera direction {self.direction} is not finite")
        for name, fov in (("fovx", self.fovx), ("fovy", self.fovy)):
            if not MIN_FOV <= fov <= MAX_FOV:
                raise ValueError(f"{name} = {fov} is outside [{MIN_FOV}, {MAX_FOV}]")


def _clamp_fov(fov: float) -> float:
    return min(max(fov, MIN_FOV), MAX_FOV)


# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_direction = ti.Vector.field(3, dtype=ti.f32, shape=())
_projection_mode = ti.field(dtype=ti.i32, shape=())

# tan(fov / 2) for each axis, precomputed on the host
_tan_half_fovx = ti.field(dtype=ti.f32, shape=())
_tan_half_fovy = ti.field(dtype=ti.f32, shape=())

# Scratch output for camera_ray()
_query_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_query_direction = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_camera(camera: Camera) -> None:
    """Upload camera state to the Taichi fields read by get_ray().

    Called once per frame so that FOV and projection changes made between
    frames take effect.

    Args:
        camera: Camera state to upload.

    Raises:
        ValueError: If the camera state is invalid (see Camera.validate).
    """
    camera.validate()

    _camera_origin[None] = list(camera.position)
    _camera_direction[None] = list(camera.direction)
    _projection_mode[None] = int(camera.mode)
    _tan_half_fovx[None] = math.tan(math.radians(camera.fovx) / 2.0)
    _tan_half_fovy[None] = math.tan(math.radians(camera.fovy) / 2.0)

    logger.debug(
        "Camera set up: mode={} fovx={} fovy={} position={}",
        camera.mode.name,
        camera.fovx,
        camera.fovy,
        camera.position,
    )


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def orthographic_direction(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Ray direction for a pixel under the orthographic projection.

    Args:
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        ``normalize((x, y, 0) + forward)`` with x, y the pixel offset from the
        image center divided by the image size.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    x = (ti.cast(pixel_i, ti.f32) - w / 2.0) / w
    y = (ti.cast(pixel_j, ti.f32) - h / 2.0) / h
    return into_unit(vec3(x, y, 0.0) + _camera_direction[None])


@ti.func
def perspective_direction(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Ray direction for a pixel under the perspective projection.

    Args:
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The normalized camera-space direction through the pixel center,
        used as a world-space direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    aspect_ratio = w / h

    # Pixel center in normalized device coordinates [0, 1]
    ndc_x = (ti.cast(pixel_i, ti.f32) + 0.5) / w
    ndc_y = (ti.cast(pixel_j, ti.f32) + 0.5) / h

    # Screen space [-1, 1]
    screen_x = 2.0 * ndc_x - 1.0
    screen_y = 2.0 * ndc_y - 1.0

    camera_x = screen_x * aspect_ratio * _tan_half_fovx[None]
    camera_y = screen_y * _tan_half_fovy[None]
    return into_unit(vec3(camera_x, camera_y, -1.0))


@ti.func
def get_ray(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through a pixel for the active projection.

    Args:
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray starting at the camera position with a unit direction.
    """
    direction = vec3(0.0, 0.0, 0.0)
    if _projection_mode[None] == int(ProjectionMode.ORTHOGRAPHIC):
        direction = orthographic_direction(pixel_i, pixel_j, width, height)
    else:
        direction = perspective_direction(pixel_i, pixel_j, width, height)
    return make_ray(_camera_origin[None], direction)


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera position in world space."""
    return _camera_origin[None]


@ti.kernel
def _query_ray(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32):
    ray = get_ray(pixel_i, pixel_j, width, height)
    _query_origin[None] = ray.origin
    _query_direction[None] = ray.direction


def camera_ray(
    pixel_i: int, pixel_j: int, width: int, height: int
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Compute the primary ray for one pixel from Python.

    Uses the camera state last uploaded with setup_camera(). Intended for
    tests and debugging; rendering calls get_ray() inside the frame kernel.

    Returns:
        Tuple of (origin, direction) as (x, y, z) tuples.
    """
    _query_ray(pixel_i, pixel_j, width, height)
    o = _query_origin[None]
    d = _query_direction[None]
    return (
        (float(o[0]), float(o[1]), float(o[2])),
        (float(d[0]), float(d[1]), float(d[2])),
    )


def get_camera_info() -> dict[str, object]:
    """Get the uploaded camera state for debugging.

    Returns:
        Dictionary with origin, direction, mode, tan_half_fovx, tan_half_fovy.
    """
    o = _camera_origin[None]
    d = _camera_direction[None]
    return {
        "origin": (float(o[0]), float(o[1]), float(o[2])),
        "direction": (float(d[0]), float(d[1]), float(d[2])),
        "mode": ProjectionMode(int(_projection_mode[None])),
        "tan_half_fovx": float(_tan_half_fovx[None]),
        "tan_half_fovy": float(_tan_half_fovy[None]),
    }
