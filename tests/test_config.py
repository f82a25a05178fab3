"""Unit tests for render configuration."""

import pytest


class TestRenderConfig:
    def test_defaults_are_valid(self):
        from raycaster.config import RenderConfig

        config = RenderConfig()
        config.validate()
        assert config.background == (0, 0, 0, 255)

    def test_make_camera(self):
        from raycaster.camera.projection import ProjectionMode
        from raycaster.config import RenderConfig

        config = RenderConfig(fovx=70.0, fovy=50.0, projection="orthographic")
        camera = config.make_camera()

        assert camera.fovx == 70.0
        assert camera.fovy == 50.0
        assert camera.mode == ProjectionMode.ORTHOGRAPHIC

    @pytest.mark.parametrize(
        "overrides",
        [
            {"width": 0},
            {"height": 5000},
            {"fovx": 0.0},
            {"fovy": 180.0},
            {"camera_position": (0.0, float("nan"), 0.0)},
            {"projection": "fisheye"},
            {"background": (0, 0, 0, 256)},
            {"arch": "tpu"},
        ],
    )
    def test_invalid_settings(self, overrides):
        from raycaster.config import RenderConfig

        with pytest.raises(ValueError):
            RenderConfig(**overrides).validate()

    def test_from_dict(self):
        from raycaster.config import RenderConfig

        config = RenderConfig.from_dict(
            {"width": 320, "height": 240, "background": [1, 2, 3, 4]}
        )

        assert (config.width, config.height) == (320, 240)
        assert config.background == (1, 2, 3, 4)

    def test_from_dict_unknown_key(self):
        from raycaster.config import RenderConfig

        with pytest.raises(ValueError, match="Unknown configuration keys"):
            RenderConfig.from_dict({"samples": 4})

    def test_dict_round_trip(self):
        from raycaster.config import RenderConfig

        config = RenderConfig(width=100, projection="orthographic")
        assert RenderConfig.from_dict(config.to_dict()) == config
