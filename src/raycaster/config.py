"""Render configuration.

``RenderConfig`` gathers everything fixed at startup: frame size, Taichi
backend, background color and the initial camera state. It is built from
command-line flags by the example scripts or from a plain dictionary.

Example:
    >>> config = RenderConfig(width=320, height=240, fovx=70.0)
    >>> config.validate()
    >>> camera = config.make_camera()
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any

from raycaster.camera.projection import MAX_FOV, MIN_FOV, Camera, ProjectionMode
from raycaster.core.renderer import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH
from raycaster.core.shading import DEFAULT_BACKGROUND
from raycaster.materials.flat import normalize_color

ARCH_NAMES = ("cpu", "gpu", "cuda", "vulkan", "metal")


@dataclass
class RenderConfig:
    """Startup configuration for a render session.

    Attributes:
        width: Frame width in pixels.
        height: Frame height in pixels.
        fovx: Initial horizontal field of view in degrees.
        fovy: Initial vertical field of view in degrees.
        camera_position: Camera position (x, y, z).
        camera_direction: Camera forward vector (x, y, z).
        projection: Initial projection, "perspective" or "orthographic".
        background: Background color (R, G, B, A).
        arch: Taichi backend name (see ARCH_NAMES).
    """

    width: int = 640
    height: int = 480
    fovx: float = 60.0
    fovy: float = 60.0
    camera_position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    camera_direction: tuple[float, float, float] = (0.0, 0.0, -1.0)
    projection: str = "perspective"
    background: tuple[int, int, int, int] = DEFAULT_BACKGROUND
    arch: str = "cpu"

    def validate(self) -> None:
        """Check every setting.

        Raises:
            ValueError: If any setting is out of range.
        """
        if not 0 < self.width <= MAX_IMAGE_WIDTH:
            raise ValueError(f"width = {self.width} is outside (0, {MAX_IMAGE_WIDTH}]")
        if not 0 < self.height <= MAX_IMAGE_HEIGHT:
            raise ValueError(f"height = {self.height} is outside (0, {MAX_IMAGE_HEIGHT}]")
        for name in ("fovx", "fovy"):
            value = getattr(self, name)
            if not MIN_FOV <= value <= MAX_FOV:
                raise ValueError(f"{name} = {value} is outside [{MIN_FOV}, {MAX_FOV}]")
        for name in ("camera_position", "camera_direction"):
            value = getattr(self, name)
            if len(value) != 3 or not all(math.isfinite(c) for c in value):
                raise ValueError(f"{name} must be 3 finite numbers, got {value}")
        self.projection_mode()
        normalize_color(self.background)
        if self.arch not in ARCH_NAMES:
            raise ValueError(f"Unknown arch '{self.arch}', expected one of {ARCH_NAMES}")

    def projection_mode(self) -> ProjectionMode:
        """Resolve the projection name to a ProjectionMode."""
        try:
            return ProjectionMode[self.projection.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown projection '{self.projection}', "
                "expected 'perspective' or 'orthographic'"
            ) from None

    def make_camera(self) -> Camera:
        """Build the initial camera from this configuration."""
        return Camera(
            position=tuple(self.camera_position),
            direction=tuple(self.camera_direction),
            fovx=self.fovx,
            fovy=self.fovy,
            mode=self.projection_mode(),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Build a validated configuration from a dictionary.

        Missing keys keep their defaults; sequences are converted to tuples.

        Raises:
            ValueError: If a key is unknown or a value is invalid.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {unknown}")

        values = {
            key: tuple(value) if isinstance(value, list) else value
            for key, value in data.items()
        }
        config = cls(**values)
        config.validate()
        return config
