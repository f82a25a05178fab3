"""Pytest configuration for ray caster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42, fast_math=False)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene data before and after each test.

    Object, material and background state live in module-level fields
    shared by every kernel, so tests would otherwise leak into each other.
    """
    # Import here so that Taichi is initialized first
    from raycaster.core.shading import DEFAULT_BACKGROUND, set_background_color
    from raycaster.materials.flat import clear_materials
    from raycaster.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_materials()
        set_background_color(DEFAULT_BACKGROUND)

    _clear_all()

    yield

    _clear_all()
