"""Scene module for object storage and nearest-hit queries.

Components:
    intersection: Object storage fields, per-object dispatch and the
        nearest-hit resolver
    manager: SceneManager coordinating objects and materials
    demo: Default sphere scene

Scene data is organized for kernel access:
    - Structure-of-Arrays layout for object data
    - One kind tag per object for shape dispatch
    - Material IDs indexing the flat color registry
"""

from .demo import DEFAULT_SPHERES, create_default_scene
from .intersection import (
    MAX_OBJECTS,
    ObjectKind,
    SceneHitRecord,
    add_sphere,
    cast_ray,
    clear_scene,
    get_object_count,
    get_object_material_id,
    get_object_position,
    intersect_object,
    intersect_scene,
)
from .manager import SceneConfig, SceneManager, SceneObject, SphereInfo

__all__ = [
    # Intersection module
    "ObjectKind",
    "SceneHitRecord",
    "add_sphere",
    "clear_scene",
    "get_object_count",
    "intersect_object",
    "intersect_scene",
    "get_object_position",
    "get_object_material_id",
    "cast_ray",
    "MAX_OBJECTS",
    # Manager module
    "SceneManager",
    "SceneObject",
    "SphereInfo",
    "SceneConfig",
    # Demo scene
    "create_default_scene",
    "DEFAULT_SPHERES",
]
