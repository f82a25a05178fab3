"""Flat color material.

Every object carries a single material: one RGBA color with 8-bit channels.
Shading scales the color channels by the normal/view intensity of the hit
(see ``raycaster.core.shading``), so a material is effectively the color of
a surface facing the viewer head-on.

Colors live in two places:
- ``Material``: frozen host-side value used when building scenes.
- ``material_colors``: Taichi field indexed by material ID, read by kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.materials.flat import Material, add_material
    >>> red = Material((255, 0, 0))
    >>> material_id = add_material(red)
"""

from collections.abc import Sequence
from dataclasses import dataclass

import taichi as ti
from loguru import logger

# RGBA color with integer channels in [0, 255]
color4 = ti.types.vector(4, ti.i32)

OPAQUE = 255


def normalize_color(color: Sequence[int]) -> tuple[int, int, int, int]:
    """Validate a 3- or 4-channel color and expand it to RGBA.

    Args:
        color: (R, G, B) or (R, G, B, A) with integer channels in [0, 255].

    Returns:
        The color as an (R, G, B, A) tuple. Alpha defaults to 255.

    Raises:
        ValueError: If the channel count is not 3 or 4, or a channel is
            outside [0, 255].
    """
    if len(color) not in (3, 4):
        raise ValueError(f"Color must have 3 or 4 channels, got {len(color)}")
    channels = [int(c) for c in color]
    for i, channel in enumerate(channels):
        if channel < 0 or channel > 255:
            raise ValueError(f"Color channel {i} = {channel} is outside [0, 255].")
    if len(channels) == 3:
        channels.append(OPAQUE)
    return (channels[0], channels[1], channels[2], channels[3])


@dataclass(frozen=True)
class Material:
    """Visual attributes of an object.

    Attributes:
        color: RGBA color, 8-bit channels. A 3-channel color is accepted and
            stored with an opaque alpha. Defaults to opaque white.
    """

    color: tuple[int, int, int, int] = (255, 255, 255, OPAQUE)

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", normalize_color(self.color))


# =============================================================================
# Material Field Storage
# =============================================================================

# Maximum number of materials in the scene
MAX_MATERIALS = 1024

material_colors = ti.Vector.field(4, dtype=ti.i32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all registered materials.

    Resets the material count to zero. Existing data in the field will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(material: Material) -> int:
    """Register a material and return its ID.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_colors[idx] = list(material.color)
    num_materials[None] = idx + 1
    logger.debug("Registered material {} with color {}", idx, material.color)
    return idx


def get_material_count() -> int:
    """Get the number of registered materials."""
    return int(num_materials[None])


def get_material(material_id: int) -> Material:
    """Read a registered material back from the field.

    Raises:
        ValueError: If material_id is not a registered material.
    """
    if not 0 <= material_id < num_materials[None]:
        raise ValueError(f"Invalid material_id: {material_id}")
    c = material_colors[material_id]
    return Material((int(c[0]), int(c[1]), int(c[2]), int(c[3])))


@ti.func
def get_material_color(material_id: ti.i32) -> color4:
    """Get the RGBA color of a material.

    Out-of-range IDs yield opaque white, the default material.
    """
    result = color4(255, 255, 255, OPAQUE)
    if 0 <= material_id < num_materials[None]:
        result = material_colors[material_id]
    return result
