"""Interactive camera controls.

Input arrives as discrete events between frames. The only state they change
is the camera's field of view and projection mode; quit events end the
render loop.

Example:
    >>> camera = Camera()
    >>> apply_event(camera, InputEvent.TOGGLE_PROJECTION)
    True
    >>> camera.mode
    <ProjectionMode.ORTHOGRAPHIC: 0>
    >>> apply_event(camera, InputEvent.ESCAPE)
    False
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from loguru import logger

from raycaster.camera.projection import Camera

# Degrees per FOV adjustment event
FOV_STEP = 1.0


class InputEvent(Enum):
    """Events delivered by the input source."""

    QUIT = "quit"
    ESCAPE = "escape"
    TOGGLE_PROJECTION = "toggle_projection"
    FOVX_UP = "fovx_up"
    FOVX_DOWN = "fovx_down"
    FOVY_UP = "fovy_up"
    FOVY_DOWN = "fovy_down"


def apply_event(camera: Camera, event: InputEvent) -> bool:
    """Apply one input event to the camera.

    Args:
        camera: Camera state to mutate.
        event: The event to apply.

    Returns:
        False if the event requests the render loop to stop, True otherwise.
    """
    if event in (InputEvent.QUIT, InputEvent.ESCAPE):
        return False

    if event == InputEvent.TOGGLE_PROJECTION:
        mode = camera.toggle_projection()
        logger.info("Projection mode: {}", mode.name.lower())
    elif event == InputEvent.FOVX_UP:
        camera.adjust_fovx(FOV_STEP)
    elif event == InputEvent.FOVX_DOWN:
        camera.adjust_fovx(-FOV_STEP)
    elif event == InputEvent.FOVY_UP:
        camera.adjust_fovy(FOV_STEP)
    elif event == InputEvent.FOVY_DOWN:
        camera.adjust_fovy(-FOV_STEP)

    if event in (
        InputEvent.FOVX_UP,
        InputEvent.FOVX_DOWN,
        InputEvent.FOVY_UP,
        InputEvent.FOVY_DOWN,
    ):
        logger.debug("FOV: x={} y={}", camera.fovx, camera.fovy)

    return True


def apply_events(camera: Camera, events: Iterable[InputEvent]) -> bool:
    """Apply a batch of events in order, stopping at the first quit.

    Returns:
        False if any event requested the render loop to stop.
    """
    for event in events:
        if not apply_event(camera, event):
            return False
    return True
