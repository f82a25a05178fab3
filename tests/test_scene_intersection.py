"""Unit tests for scene storage and nearest-hit resolution.

Tests cover:
- Object storage and validation
- Nearest hit among overlapping spheres regardless of insertion order
- Roots behind the ray origin never winning
- Ties resolved in favor of the earlier object
- Misses on an empty scene
"""

import math

import pytest

FORWARD = (0.0, 0.0, -1.0)
ORIGIN = (0.0, 0.0, 0.0)


class TestObjectStorage:
    def test_add_sphere_returns_sequential_indices(self):
        from raycaster.scene.intersection import add_sphere, get_object_count

        assert add_sphere((0.0, 0.0, -5.0), 1.0) == 0
        assert add_sphere((0.0, 0.0, -8.0), 1.0) == 1
        assert get_object_count() == 2

    @pytest.mark.parametrize("radius", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_radius_rejected(self, radius):
        from raycaster.scene.intersection import add_sphere, get_object_count

        with pytest.raises(ValueError):
            add_sphere((0.0, 0.0, -5.0), radius)
        assert get_object_count() == 0

    def test_capacity_exceeded(self):
        from raycaster.scene.intersection import MAX_OBJECTS, add_sphere

        for i in range(MAX_OBJECTS):
            add_sphere((0.0, 0.0, -float(i + 2)), 0.5)
        with pytest.raises(RuntimeError):
            add_sphere((0.0, 0.0, -1.0), 0.5)

    def test_clear_scene(self):
        from raycaster.scene.intersection import add_sphere, clear_scene, get_object_count

        add_sphere((0.0, 0.0, -5.0), 1.0)
        clear_scene()
        assert get_object_count() == 0


class TestNearestHit:
    def test_empty_scene_misses(self):
        from raycaster.scene.intersection import cast_ray

        assert cast_ray(ORIGIN, FORWARD) == (False, 0.0, -1)

    def test_single_sphere(self):
        from raycaster.scene.intersection import add_sphere, cast_ray

        add_sphere((0.0, 0.0, -5.0), 1.0)
        hit, t, index = cast_ray(ORIGIN, FORWARD)

        assert hit
        assert abs(t - 4.0) < 1e-5
        assert index == 0

    def test_near_sphere_occludes_far_sphere(self):
        from raycaster.scene.intersection import add_sphere, cast_ray

        add_sphere((0.0, 0.0, -5.0), 1.0)
        add_sphere((0.0, 0.0, -8.0), 2.0)
        hit, t, index = cast_ray(ORIGIN, FORWARD)

        assert hit
        assert abs(t - 4.0) < 1e-5
        assert index == 0

    def test_nearest_wins_regardless_of_order(self):
        from raycaster.scene.intersection import add_sphere, cast_ray

        add_sphere((0.0, 0.0, -8.0), 2.0)
        add_sphere((0.0, 0.0, -5.0), 1.0)
        hit, t, index = cast_ray(ORIGIN, FORWARD)

        assert hit
        assert abs(t - 4.0) < 1e-5
        assert index == 1

    def test_sphere_behind_origin_is_ignored(self):
        from raycaster.scene.intersection import add_sphere, cast_ray

        add_sphere((0.0, 0.0, 5.0), 1.0)
        hit, _, index = cast_ray(ORIGIN, FORWARD)

        assert not hit
        assert index == -1

    def test_behind_sphere_does_not_mask_front_sphere(self):
        from raycaster.scene.intersection import add_sphere, cast_ray

        add_sphere((0.0, 0.0, 3.0), 1.0)
        add_sphere((0.0, 0.0, -10.0), 1.0)
        hit, t, index = cast_ray(ORIGIN, FORWARD)

        assert hit
        assert abs(t - 9.0) < 1e-5
        assert index == 1

    def test_origin_inside_sphere_hits_exit_point(self):
        from raycaster.scene.intersection import add_sphere, cast_ray

        add_sphere(ORIGIN, 3.0)
        hit, t, _ = cast_ray(ORIGIN, FORWARD)

        assert hit
        assert abs(t - 3.0) < 1e-5

    def test_tie_goes_to_first_object(self):
        from raycaster.scene.intersection import add_sphere, cast_ray

        add_sphere((0.0, 0.0, -5.0), 1.0, material_id=3)
        add_sphere((0.0, 0.0, -5.0), 1.0, material_id=4)
        hit, _, index = cast_ray(ORIGIN, FORWARD)

        assert hit
        assert index == 0

    def test_nan_direction_misses(self):
        from raycaster.scene.intersection import add_sphere, cast_ray

        add_sphere((0.0, 0.0, -5.0), 1.0)
        hit, _, _ = cast_ray(ORIGIN, (math.nan, math.nan, math.nan))

        assert not hit
