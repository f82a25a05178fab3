"""Unit tests for the ray module.

Tests cover:
- Ray dataclass construction
- ray_at evaluation at zero, positive and negative t
"""

import taichi as ti


class TestRayBasics:
    """Tests for Ray dataclass and basic operations."""

    def test_make_ray(self):
        from raycaster.core.ray import make_ray
        from raycaster.core.vector import vec3

        origin_result = ti.field(dtype=ti.math.vec3, shape=())
        direction_result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 1.0, 0.0))
            origin_result[None] = ray.origin
            direction_result[None] = ray.direction

        test_kernel()
        o = origin_result[None]
        d = direction_result[None]
        assert (o[0], o[1], o[2]) == (1.0, 2.0, 3.0)
        assert (d[0], d[1], d[2]) == (0.0, 1.0, 0.0)

    def test_ray_at_origin(self):
        """Test ray_at returns origin when t=0."""
        from raycaster.core.ray import Ray, ray_at
        from raycaster.core.vector import vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 0.0)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 2.0) < 1e-6
        assert abs(r[2] - 3.0) < 1e-6

    def test_ray_at_positive_t(self):
        from raycaster.core.ray import Ray, ray_at
        from raycaster.core.vector import vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(1.0, 0.0, 0.0))
            result[None] = ray_at(ray, 5.0)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 5.0) < 1e-6
        assert abs(r[1]) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_ray_at_negative_t(self):
        """Test ray_at handles negative t (behind origin)."""
        from raycaster.core.ray import Ray, ray_at
        from raycaster.core.vector import vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, -2.0)

        test_kernel()
        r = result[None]
        assert abs(r[2] - 2.0) < 1e-6
