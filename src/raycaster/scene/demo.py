"""Default demo scene.

A handful of colored spheres in front of a camera at the origin looking
down -z. Two of the spheres overlap along the central view axis so the
nearest-hit resolution is visible in the image.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.demo import create_default_scene
    >>> scene, camera = create_default_scene()
"""

from __future__ import annotations

from raycaster.camera.projection import Camera
from raycaster.scene.manager import SceneManager

# (center, radius, RGB color)
DEFAULT_SPHERES: list[tuple[tuple[float, float, float], float, tuple[int, int, int]]] = [
    ((0.0, 0.0, -5.0), 1.0, (220, 60, 60)),
    ((0.0, 0.0, -8.0), 2.0, (60, 200, 90)),
    ((-2.5, 0.5, -6.0), 0.8, (70, 110, 230)),
    ((2.5, -0.5, -6.0), 0.8, (240, 200, 60)),
    ((0.0, -101.5, -6.0), 100.0, (180, 180, 180)),
]


def create_default_scene(camera: Camera | None = None) -> tuple[SceneManager, Camera]:
    """Create the demo scene.

    Args:
        camera: Camera to return alongside the scene. A default perspective
            camera at the origin is created if None.

    Returns:
        A tuple of (SceneManager, Camera).
    """
    scene = SceneManager()
    for center, radius, color in DEFAULT_SPHERES:
        scene.add_colored_sphere(center, radius, color)

    if camera is None:
        camera = Camera()

    return scene, camera
