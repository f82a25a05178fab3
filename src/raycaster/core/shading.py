"""Normal/view shading for primary-ray hits.

There is no light source. A hit is shaded by how directly the surface faces
the camera:

    P = O + t * D                        hit point
    N = normalize(position - P)          sphere normal, pointing inward
    V = normalize(P - camera_position)   view vector
    k = max(0, N . V)

The inward normal and the outgoing view vector point the same way on the
visible side of a sphere, so a surface seen head-on gets k = 1 and
silhouette edges fall off to 0. The RGB channels of the material color are
multiplied by k and truncated; alpha is kept as is.

Pixels whose ray misses every object, or whose intensity is not finite
(degenerate geometry such as a zero-length view vector), get the
background color.
"""

from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import Ray, ray_at
from raycaster.core.vector import into_unit, is_finite_vec, vec3
from raycaster.materials.flat import color4, get_material_color, normalize_color
from raycaster.scene.intersection import SceneHitRecord, get_object_position

DEFAULT_BACKGROUND = (0, 0, 0, 255)

_background_color = ti.Vector.field(4, dtype=ti.i32, shape=())


def set_background_color(color: Sequence[int]) -> None:
    """Set the color written for pixels that hit nothing.

    Args:
        color: (R, G, B) or (R, G, B, A), channels in [0, 255].

    Raises:
        ValueError: If the color is invalid.
    """
    _background_color[None] = list(normalize_color(color))


def get_background_color() -> tuple[int, int, int, int]:
    c = _background_color[None]
    return (int(c[0]), int(c[1]), int(c[2]), int(c[3]))


@ti.func
def get_background() -> color4:
    return _background_color[None]


@ti.func
def shading_intensity(normal: vec3, view: vec3) -> ti.f32:
    """Clamp the normal/view cosine to [0, 1].

    NaN inputs propagate as NaN so the caller can detect them.
    """
    k = tm.dot(normal, view)
    if k < 0.0:
        k = 0.0
    return k


@ti.func
def scale_color(color: color4, k: ti.f32) -> color4:
    """Scale the RGB channels by k with truncation, keeping alpha."""
    return color4(
        ti.cast(ti.cast(color[0], ti.f32) * k, ti.i32),
        ti.cast(ti.cast(color[1], ti.f32) * k, ti.i32),
        ti.cast(ti.cast(color[2], ti.f32) * k, ti.i32),
        color[3],
    )


@ti.func
def shade(ray: Ray, record: SceneHitRecord, camera_position: vec3) -> color4:
    """Compute the color for a primary ray.

    Args:
        ray: The primary ray that produced the record.
        record: Nearest-hit record from intersect_scene().
        camera_position: Camera position in world space.

    Returns:
        The shaded material color, or the background color on a miss or
        for degenerate geometry.
    """
    color = get_background()
    if record.hit == 1:
        point = ray_at(ray, record.t)
        normal = into_unit(get_object_position(record.object_index) - point)
        view = into_unit(point - camera_position)
        if is_finite_vec(normal) == 1 and is_finite_vec(view) == 1:
            k = shading_intensity(normal, view)
            color = scale_color(get_material_color(record.material_id), k)
    return color
