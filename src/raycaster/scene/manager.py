"""Scene manager coordinating objects and their materials.

This module provides a high-level scene building API on top of the raw
object and material fields. It keeps a Python-side record of every object
and material so scenes can be inspected and serialized.

The SceneManager maintains:
- The material registry (material_id -> Material)
- The object list, each entry exposing its position and material
- Dictionary serialization for scene configuration

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> red = scene.add_material((255, 0, 0))
    >>> scene.add_sphere((0.0, 0.0, -5.0), 1.0, red)
    >>> scene.add_colored_sphere((2.0, 0.0, -6.0), 1.0, (0, 0, 255))
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from raycaster.materials.flat import (
    MAX_MATERIALS,
    Material,
    add_material,
    clear_materials,
)
from raycaster.scene.intersection import (
    MAX_OBJECTS,
    ObjectKind,
    add_sphere,
    clear_scene,
    get_object_count,
)


@runtime_checkable
class SceneObject(Protocol):
    """Host-side view of a scene object."""

    @property
    def kind(self) -> ObjectKind: ...

    @property
    def position(self) -> tuple[float, float, float]: ...

    @property
    def material(self) -> Material: ...


@dataclass(frozen=True)
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        object_index: The index in the object storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID assigned to the sphere.
        material: The material assigned to the sphere.
    """

    object_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int
    material: Material

    @property
    def kind(self) -> ObjectKind:
        return ObjectKind.SPHERE

    @property
    def position(self) -> tuple[float, float, float]:
        return self.center


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations ({"color": [r, g, b, a]}).
        spheres: List of sphere configurations.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Builds and tracks the objects and materials of a scene.

    Creating a SceneManager clears any previously built scene, since object
    and material storage is shared by every kernel.

    Attributes:
        materials: Registered materials, indexed by material ID.
        objects: Objects in insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials: list[Material] = []
        self.objects: list[SceneObject] = []
        self._clear_all()

    def _clear_all(self) -> None:
        clear_scene()
        clear_materials()
        self.materials.clear()
        self.objects.clear()

    def clear(self) -> None:
        """Remove every object and material."""
        self._clear_all()

    def add_material(self, color: Sequence[int]) -> int:
        """Register a flat color material.

        Args:
            color: (R, G, B) or (R, G, B, A), channels in [0, 255].

        Returns:
            The material ID.

        Raises:
            ValueError: If the color is invalid.
            RuntimeError: If the maximum number of materials is exceeded.
        """
        material = Material(tuple(color))
        material_id = add_material(material)
        self.materials.append(material)
        return material_id

    def add_sphere(
        self,
        center: Sequence[float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere using a registered material.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere.
            material_id: ID returned by add_material().

        Returns:
            The object index of the sphere.

        Raises:
            ValueError: If material_id is unknown or the radius is invalid.
            RuntimeError: If the maximum number of objects is exceeded.
        """
        if not 0 <= material_id < len(self.materials):
            raise ValueError(f"Invalid material_id: {material_id}")

        center_tuple = (float(center[0]), float(center[1]), float(center[2]))
        object_index = add_sphere(center_tuple, float(radius), material_id)
        self.objects.append(
            SphereInfo(
                object_index=object_index,
                center=center_tuple,
                radius=float(radius),
                material_id=material_id,
                material=self.materials[material_id],
            )
        )
        return object_index

    def add_colored_sphere(
        self,
        center: Sequence[float],
        radius: float,
        color: Sequence[int],
    ) -> tuple[int, int]:
        """Add a sphere with a new material of the given color.

        Returns:
            Tuple of (object_index, material_id).
        """
        material_id = self.add_material(color)
        object_index = self.add_sphere(center, radius, material_id)
        return object_index, material_id

    def get_object_count(self) -> int:
        """Get the number of objects stored for rendering."""
        return get_object_count()

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()
        for material in self.materials:
            config.materials.append({"color": list(material.color)})
        for obj in self.objects:
            if isinstance(obj, SphereInfo):
                config.spheres.append(
                    {
                        "center": list(obj.center),
                        "radius": obj.radius,
                        "material_id": obj.material_id,
                    }
                )
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()

        for mat_config in config.materials:
            self.add_material(mat_config.get("color", [255, 255, 255, 255]))

        for sphere_config in config.spheres:
            self.add_sphere(
                sphere_config.get("center", [0.0, 0.0, 0.0]),
                sphere_config.get("radius", 1.0),
                sphere_config.get("material_id", 0),
            )

        logger.info(
            "Loaded scene with {} objects and {} materials",
            len(self.objects),
            len(self.materials),
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {"materials": config.materials, "spheres": config.spheres}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary with 'materials' and 'spheres' keys."""
        config = SceneConfig(
            materials=data.get("materials", []),
            spheres=data.get("spheres", []),
        )
        self.from_config(config)

    @staticmethod
    def get_max_objects() -> int:
        """Get the maximum number of objects supported."""
        return MAX_OBJECTS

    @staticmethod
    def get_max_materials() -> int:
        """Get the maximum number of materials supported."""
        return MAX_MATERIALS
