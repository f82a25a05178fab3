"""Geometry module for shape primitives.

This module provides geometric primitives and their intersection routines:

Components:
    sphere: Sphere primitive with closed-form ray-sphere intersection

All intersection routines are Taichi functions (@ti.func) so they can run
inside the per-pixel render kernel. Each returns raw roots; filtering out
roots behind the ray origin is the scene resolver's job.

Ray-object intersection follows the pattern:
    hit, t = hit_shape(ray_origin, ray_direction, shape_data)
"""

from .sphere import Sphere, hit_sphere, make_sphere, select_root, sphere_roots

__all__ = [
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "select_root",
    "sphere_roots",
]
