"""Sphere primitive with closed-form ray-sphere intersection.

For a sphere of center C and radius R, and a ray ``O + t * D`` with unit
direction D, substituting the ray into ``|P - C|^2 = R^2`` gives:

    t^2 + 2*b*t + c = 0

    L = O - C
    b = D . L
    c = L . L - R^2
    discriminant = b^2 - c

Because D is unit length the quadratic coefficient is 1 and the roots are
``-b +/- sqrt(discriminant)``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(2, 0, 0), radius=1.0)
    >>> # Use sphere_roots / hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from raycaster.core.vector import vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def sphere_roots(ray_origin: vec3, ray_direction: vec3, sphere: Sphere):
    """Solve the ray-sphere quadratic.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (must be unit length).
        sphere: The sphere to test.

    Returns:
        A tuple (hit, t0, t1):
        - hit: 1 if the discriminant is non-negative, 0 otherwise. A NaN
          discriminant (degenerate ray) counts as a miss.
        - t0: ``-b + sqrt(discriminant)``.
        - t1: ``-b - sqrt(discriminant)``. Equal to t0 for a tangent ray.
    """
    oc = ray_origin - sphere.center
    b = tm.dot(ray_direction, oc)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = b * b - c

    hit = 0
    t0 = 0.0
    t1 = 0.0

    if discriminant == 0.0:
        # Tangent ray: double root
        hit = 1
        t0 = -b
        t1 = -b
    elif discriminant > 0.0:
        sqrt_d = ti.sqrt(discriminant)
        hit = 1
        t0 = -b + sqrt_d
        t1 = -b - sqrt_d

    return hit, t0, t1


@ti.func
def select_root(t0: ti.f32, t1: ti.f32) -> ti.f32:
    """Pick the preferred root of a ray-sphere intersection.

    t1 is the near surface; when it lies behind the ray origin (origin inside
    the sphere, or the sphere behind the ray) t0 is returned instead. The
    result can still be negative and it is up to the caller to discard it.
    """
    t = t1
    if t1 < 0.0:
        t = t0
    return t


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere):
    """Intersect a ray with a sphere.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (must be unit length).
        sphere: The sphere to test.

    Returns:
        A tuple (hit, t) where t is the selected root (see select_root).
        Only valid if hit == 1.
    """
    hit, t0, t1 = sphere_roots(ray_origin, ray_direction, sphere)
    t = 0.0
    if hit == 1:
        t = select_root(t0, t1)
    return hit, t


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
