"""Unit tests for normal/view shading.

Tests cover:
- Intensity clamping
- RGB scaling with truncation and alpha preservation
- Background on a miss and for degenerate geometry
- Background color configuration
"""

import pytest
import taichi as ti


class TestShadingHelpers:
    def test_shading_intensity_clamped_at_zero(self):
        from raycaster.core.shading import shading_intensity
        from raycaster.core.vector import vec3

        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            result[0] = shading_intensity(vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, -1.0))
            result[1] = shading_intensity(vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, 1.0))

        test_kernel()
        assert abs(result[0] - 1.0) < 1e-6
        assert result[1] == 0.0

    def test_scale_color_truncates_and_keeps_alpha(self):
        from raycaster.core.shading import scale_color
        from raycaster.materials.flat import color4

        result = ti.Vector.field(4, dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = scale_color(color4(255, 101, 3, 77), 0.5)

        test_kernel()
        assert tuple(result[None]) == (127, 50, 1, 77)


class TestShade:
    def _shade(self, origin, direction, record_args):
        from raycaster.core.ray import Ray
        from raycaster.core.shading import shade
        from raycaster.core.vector import vec3
        from raycaster.scene.intersection import SceneHitRecord

        result = ti.Vector.field(4, dtype=ti.i32, shape=())
        hit, t, index, material_id = record_args

        @ti.kernel
        def test_kernel(o: vec3, d: vec3):
            ray = Ray(origin=o, direction=d)
            record = SceneHitRecord(hit=hit, t=t, object_index=index, material_id=material_id)
            result[None] = shade(ray, record, o)

        test_kernel(vec3(*origin), vec3(*direction))
        return tuple(result[None])

    def test_head_on_hit_gets_full_color(self):
        from raycaster.materials.flat import Material, add_material
        from raycaster.scene.intersection import add_sphere

        mat = add_material(Material((200, 100, 50, 128)))
        add_sphere((0.0, 0.0, -5.0), 1.0, mat)

        color = self._shade((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (1, 4.0, 0, mat))
        assert color == (200, 100, 50, 128)

    def test_miss_gets_background(self):
        from raycaster.core.shading import set_background_color

        set_background_color((9, 8, 7, 6))
        color = self._shade((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0, 0.0, -1, -1))
        assert color == (9, 8, 7, 6)

    def test_degenerate_view_vector_gets_background(self):
        """A hit at the camera position has no view direction."""
        from raycaster.core.shading import set_background_color
        from raycaster.materials.flat import Material, add_material
        from raycaster.scene.intersection import add_sphere

        set_background_color((1, 2, 3, 4))
        mat = add_material(Material((200, 100, 50)))
        add_sphere((0.0, 0.0, -5.0), 1.0, mat)

        color = self._shade((0.0, 0.0, -4.0), (0.0, 0.0, -1.0), (1, 0.0, 0, mat))
        assert color == (1, 2, 3, 4)

    def test_degenerate_normal_gets_background(self):
        """A hit point at the sphere center has no surface normal."""
        from raycaster.core.shading import set_background_color
        from raycaster.materials.flat import Material, add_material
        from raycaster.scene.intersection import add_sphere

        set_background_color((5, 6, 7, 8))
        mat = add_material(Material((200, 100, 50)))
        add_sphere((0.0, 0.0, -5.0), 1.0, mat)

        color = self._shade((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (1, 5.0, 0, mat))
        assert color == (5, 6, 7, 8)


class TestBackgroundColor:
    def test_default_background(self):
        from raycaster.core.shading import DEFAULT_BACKGROUND, get_background_color

        assert get_background_color() == DEFAULT_BACKGROUND == (0, 0, 0, 255)

    def test_rgb_background_is_opaque(self):
        from raycaster.core.shading import get_background_color, set_background_color

        set_background_color((10, 20, 30))
        assert get_background_color() == (10, 20, 30, 255)

    def test_invalid_background_rejected(self):
        from raycaster.core.shading import set_background_color

        with pytest.raises(ValueError):
            set_background_color((0, 0, 300))
