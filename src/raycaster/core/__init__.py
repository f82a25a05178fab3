"""Core rendering module.

This module contains the fundamental building blocks for ray casting:

Components:
    vector: Host-side Vector3 value class and kernel vector helpers
    ray: Ray data structure
    shading: Normal/view intensity and color shading
    renderer: Framebuffer, per-frame sweep kernel and FrameRenderer

Every pixel of a frame is independent of every other: the sweep kernel loops
over ``ti.ndrange(width, height)`` and Taichi parallelizes that loop.
"""

from .ray import Ray, make_ray, ray_at
from .vector import Vector3, dot, into_unit, is_finite_vec, length, vec3

# Note: shading and renderer are NOT imported here to avoid circular imports.
# Import directly from raycaster.core.renderer when needed.

__all__ = [
    "Ray",
    "make_ray",
    "ray_at",
    "Vector3",
    "vec3",
    "dot",
    "length",
    "into_unit",
    "is_finite_vec",
]
