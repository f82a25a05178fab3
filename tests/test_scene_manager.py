"""Unit tests for the scene manager.

Tests cover:
- Material registration and sphere creation
- Object views exposing kind, position and material
- Dictionary serialization round trip
- The default demo scene
"""

import pytest


class TestSceneManager:
    def test_new_manager_clears_existing_scene(self):
        from raycaster.scene.intersection import add_sphere, get_object_count
        from raycaster.scene.manager import SceneManager

        add_sphere((0.0, 0.0, -5.0), 1.0)
        scene = SceneManager()

        assert get_object_count() == 0
        assert scene.get_object_count() == 0

    def test_add_material_and_sphere(self):
        from raycaster.scene.intersection import ObjectKind
        from raycaster.scene.manager import SceneManager

        scene = SceneManager()
        red = scene.add_material((255, 0, 0))
        index = scene.add_sphere((0.0, 1.0, -5.0), 1.5, red)

        assert red == 0
        assert index == 0
        assert scene.get_object_count() == 1

        sphere = scene.objects[0]
        assert sphere.kind == ObjectKind.SPHERE
        assert sphere.position == (0.0, 1.0, -5.0)
        assert sphere.radius == 1.5
        assert sphere.material.color == (255, 0, 0, 255)

    def test_objects_satisfy_scene_object(self):
        from raycaster.scene.manager import SceneManager, SceneObject

        scene = SceneManager()
        scene.add_colored_sphere((0.0, 0.0, -5.0), 1.0, (1, 2, 3))
        scene.add_colored_sphere((2.0, 0.0, -5.0), 0.5, (4, 5, 6))

        assert all(isinstance(obj, SceneObject) for obj in scene.objects)
        assert [obj.position for obj in scene.objects] == [(0.0, 0.0, -5.0), (2.0, 0.0, -5.0)]
        assert len(scene.to_config().spheres) == 2

    def test_invalid_material_id(self):
        from raycaster.scene.manager import SceneManager

        scene = SceneManager()
        with pytest.raises(ValueError):
            scene.add_sphere((0.0, 0.0, -5.0), 1.0, 0)

    def test_add_colored_sphere(self):
        from raycaster.scene.manager import SceneManager

        scene = SceneManager()
        first = scene.add_colored_sphere((0.0, 0.0, -5.0), 1.0, (1, 2, 3))
        second = scene.add_colored_sphere((1.0, 0.0, -5.0), 1.0, (4, 5, 6, 7))

        assert first == (0, 0)
        assert second == (1, 1)
        assert scene.objects[1].material.color == (4, 5, 6, 7)

    def test_clear(self):
        from raycaster.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_colored_sphere((0.0, 0.0, -5.0), 1.0, (1, 2, 3))
        scene.clear()

        assert scene.get_object_count() == 0
        assert scene.materials == []
        assert scene.objects == []

    def test_dict_round_trip(self):
        from raycaster.scene.intersection import cast_ray
        from raycaster.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_colored_sphere((0.0, 0.0, -5.0), 1.0, (10, 20, 30))
        scene.add_colored_sphere((0.0, 0.0, -9.0), 2.0, (40, 50, 60, 70))
        data = scene.to_dict()

        restored = SceneManager()
        restored.from_dict(data)

        assert restored.to_dict() == data
        assert restored.get_object_count() == 2
        hit, t, index = cast_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit and index == 0 and abs(t - 4.0) < 1e-5

    def test_from_dict_rejects_bad_material_reference(self):
        from raycaster.scene.manager import SceneManager

        scene = SceneManager()
        with pytest.raises(ValueError):
            scene.from_dict(
                {
                    "materials": [{"color": [255, 0, 0]}],
                    "spheres": [{"center": [0, 0, -5], "radius": 1.0, "material_id": 3}],
                }
            )

    def test_limits(self):
        from raycaster.materials.flat import MAX_MATERIALS
        from raycaster.scene.intersection import MAX_OBJECTS
        from raycaster.scene.manager import SceneManager

        assert SceneManager.get_max_objects() == MAX_OBJECTS
        assert SceneManager.get_max_materials() == MAX_MATERIALS


class TestDemoScene:
    def test_default_scene(self):
        from raycaster.camera.projection import Camera, ProjectionMode
        from raycaster.scene.demo import DEFAULT_SPHERES, create_default_scene

        scene, camera = create_default_scene()

        assert scene.get_object_count() == len(DEFAULT_SPHERES)
        assert camera.mode == ProjectionMode.PERSPECTIVE

        custom = Camera(fovx=80.0)
        _, returned = create_default_scene(custom)
        assert returned is custom

    def test_central_ray_hits_front_sphere(self):
        from raycaster.scene.demo import create_default_scene
        from raycaster.scene.intersection import cast_ray

        create_default_scene()
        hit, t, index = cast_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        assert hit
        assert index == 0
        assert abs(t - 4.0) < 1e-5
