"""Taichi-based primary-ray caster for analytic scenes.

This package renders scenes of analytic objects by casting one ray per pixel,
with support for:
- Host-side vector algebra and matching Taichi helpers
- Sphere primitives with closed-form intersection
- Orthographic and perspective cameras with independent horizontal and
  vertical field of view
- Nearest-hit resolution and normal/view shading
- Interactive preview and PNG export

Subpackages:
    core: Vector algebra, rays, shading and the frame renderer
    geometry: Shape primitives and intersection algorithms
    materials: Flat color materials
    scene: Object storage, nearest-hit resolution and scene building
    camera: Projection models and interactive controls
    preview: Interactive window and image export
"""

__version__ = "0.1.0"
