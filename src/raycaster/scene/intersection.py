"""Scene object storage and nearest-hit resolution.

Objects are a closed set of shapes stored as a tagged variant: every object
has a kind, a position, a material ID and kind-specific parameters (a radius
for spheres). Kernels dispatch on the kind tag.

The resolver tests a ray against every object (no acceleration structure)
and keeps the smallest root with t > 0. Roots behind or at the ray origin
never win, and neither do NaN roots, since every comparison with NaN is
false. On equal t the object added first wins.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.intersection import add_sphere, cast_ray, clear_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -5.0), 1.0, material_id=0)
    >>> hit, t, index = cast_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
"""

import math
from enum import IntEnum

import taichi as ti
from loguru import logger

from raycaster.core.vector import vec3
from raycaster.geometry.sphere import hit_sphere, make_sphere


class ObjectKind(IntEnum):
    """Shape tag stored per object."""

    SPHERE = 0


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection.

    Attributes:
        hit: Whether the ray hit any object in front of its origin (1 or 0).
        t: The ray parameter of the nearest hit. Only valid if hit == 1.
        object_index: Index of the nearest object. -1 on a miss.
        material_id: Material ID of the nearest object. -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    object_index: ti.i32
    material_id: ti.i32


# Maximum number of objects supported in the scene
MAX_OBJECTS = 1024

# Upper bound on accepted t values
T_MAX = 1e10

# Object storage: Structure of Arrays layout
object_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
object_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_radii = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
object_material_ids = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
num_objects = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all objects from the scene.

    Resets the object count to zero. The actual field data is not cleared
    but will be overwritten when new objects are added.
    """
    num_objects[None] = 0


def add_sphere(center: tuple[float, float, float], radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID to associate with this sphere.

    Returns:
        The index of the added object.

    Raises:
        ValueError: If the radius is not a positive finite number.
        RuntimeError: If the maximum number of objects is exceeded.
    """
    if not (math.isfinite(radius) and radius > 0.0):
        raise ValueError(f"Sphere radius must be positive and finite, got {radius}")

    idx = num_objects[None]
    if idx >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")

    object_kinds[idx] = int(ObjectKind.SPHERE)
    object_positions[idx] = list(center)
    object_radii[idx] = radius
    object_material_ids[idx] = material_id
    num_objects[None] = idx + 1
    logger.debug("Added sphere {} at {} (r={}, material {})", idx, center, radius, material_id)
    return idx


def get_object_count() -> int:
    """Get the number of objects in the scene."""
    return int(num_objects[None])


# =============================================================================
# Object Capabilities (Taichi-compatible)
# =============================================================================


@ti.func
def intersect_object(index: ti.i32, ray_origin: vec3, ray_direction: vec3):
    """Intersect a ray with one scene object, dispatching on its kind.

    Args:
        index: The object index.
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (unit length).

    Returns:
        A tuple (hit, t) with the object's preferred root. t may be negative;
        unknown kinds never hit.
    """
    hit = 0
    t = 0.0
    if object_kinds[index] == int(ObjectKind.SPHERE):
        sphere = make_sphere(object_positions[index], object_radii[index])
        hit, t = hit_sphere(ray_origin, ray_direction, sphere)
    return hit, t


@ti.func
def get_object_position(index: ti.i32) -> vec3:
    """Get the position (sphere center) of an object."""
    return object_positions[index]


@ti.func
def get_object_material_id(index: ti.i32) -> ti.i32:
    """Get the material ID of an object."""
    return object_material_ids[index]


@ti.func
def _make_miss_record() -> SceneHitRecord:
    return SceneHitRecord(hit=0, t=0.0, object_index=-1, material_id=-1)


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest object hit in front of the ray origin.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (unit length).

    Returns:
        A SceneHitRecord for the smallest root with 0 < t < T_MAX, or a miss
        record if there is none.
    """
    closest_t = T_MAX
    result = _make_miss_record()

    n = num_objects[None]
    for i in range(n):
        hit, t = intersect_object(i, ray_origin, ray_direction)
        if hit == 1 and t > 0.0 and t < closest_t:
            closest_t = t
            result = SceneHitRecord(
                hit=1,
                t=t,
                object_index=i,
                material_id=get_object_material_id(i),
            )

    return result


# Scratch output for cast_ray()
_query_hit = ti.field(dtype=ti.i32, shape=())
_query_t = ti.field(dtype=ti.f32, shape=())
_query_index = ti.field(dtype=ti.i32, shape=())


@ti.kernel
def _query_scene(origin: vec3, direction: vec3):
    # Serial single-iteration outer loop keeps the object loop nested
    ti.loop_config(serialize=True)
    for _ in range(1):
        rec = intersect_scene(origin, direction)
        _query_hit[None] = rec.hit
        _query_t[None] = rec.t
        _query_index[None] = rec.object_index


def cast_ray(
    origin: tuple[float, float, float], direction: tuple[float, float, float]
) -> tuple[bool, float, int]:
    """Resolve the nearest hit for a single ray from Python.

    Intended for tests and debugging; rendering calls intersect_scene()
    inside the frame kernel.

    Args:
        origin: Ray origin.
        direction: Ray direction (should be unit length).

    Returns:
        Tuple of (hit, t, object_index). t is 0.0 and object_index is -1
        on a miss.
    """
    _query_scene(vec3(*origin), vec3(*direction))
    return bool(_query_hit[None]), float(_query_t[None]), int(_query_index[None])
