"""Materials module.

Objects are shaded with a single flat color; the shading intensity comes
from geometry only (see ``raycaster.core.shading``).

Components:
    flat: Material value class and the GPU-side color registry
"""

from .flat import (
    MAX_MATERIALS,
    Material,
    add_material,
    clear_materials,
    color4,
    get_material,
    get_material_color,
    get_material_count,
    normalize_color,
)

__all__ = [
    "Material",
    "color4",
    "normalize_color",
    "add_material",
    "clear_materials",
    "get_material",
    "get_material_color",
    "get_material_count",
    "MAX_MATERIALS",
]
