"""Preview module for output and visualization.

Components:
    export: PNG export via Pillow
    interactive: Taichi GGUI-based interactive preview window

Example:
    >>> from raycaster.preview import save_png
    >>> from raycaster.core.renderer import FrameRenderer
    >>>
    >>> renderer = FrameRenderer(640, 480)
    >>> renderer.render(camera)
    >>> save_png(renderer, "output.png")

For the interactive window:
    >>> from raycaster.preview import InteractivePreview
    >>> preview = InteractivePreview(640, 480, camera)
    >>> preview.run()
"""

from raycaster.preview.export import (
    image_to_uint8,
    save_png,
    save_png_from_array,
)
from raycaster.preview.interactive import (
    InteractivePreview,
    event_for_key,
    is_display_available,
)

__all__ = [
    # Interactive preview
    "InteractivePreview",
    "event_for_key",
    "is_display_available",
    # Export functions
    "save_png",
    "save_png_from_array",
    "image_to_uint8",
]
