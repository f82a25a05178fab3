"""Camera module for view and ray generation.

This module provides the camera model for generating primary rays:

Components:
    projection: Camera state, orthographic and perspective ray generation
    controls: Input events that adjust field of view and projection mode

Camera responsibilities:
    - Transform (i, j) pixel coordinates to world-space rays
    - Keep horizontal and vertical field of view independently tunable
    - Switch between orthographic and perspective projection at runtime

Ray generation runs inside the frame kernel, one ray per pixel.
"""

from .controls import FOV_STEP, InputEvent, apply_event, apply_events
from .projection import (
    MAX_FOV,
    MIN_FOV,
    Camera,
    ProjectionMode,
    camera_ray,
    get_camera_info,
    get_camera_origin,
    get_ray,
    orthographic_direction,
    perspective_direction,
    setup_camera,
)

__all__ = [
    "Camera",
    "ProjectionMode",
    "setup_camera",
    "get_ray",
    "get_camera_origin",
    "orthographic_direction",
    "perspective_direction",
    "camera_ray",
    "get_camera_info",
    "MIN_FOV",
    "MAX_FOV",
    "InputEvent",
    "apply_event",
    "apply_events",
    "FOV_STEP",
]
