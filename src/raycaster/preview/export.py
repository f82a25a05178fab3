"""Image export utilities for rendered frames.

Frames are already 8-bit RGBA, so export is a straight copy into a Pillow
image; the alpha channel can be dropped for RGB output.

Example:
    >>> from raycaster.preview.export import save_png
    >>> from raycaster.core.renderer import FrameRenderer
    >>>
    >>> renderer = FrameRenderer(640, 480)
    >>> renderer.render(camera)
    >>> save_png(renderer, "frame.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from loguru import logger
from PIL import Image as PILImage

if TYPE_CHECKING:
    from raycaster.core.renderer import FrameRenderer


def image_to_uint8(
    image: npt.NDArray[np.generic],
    *,
    alpha: bool = True,
) -> npt.NDArray[np.uint8]:
    """Convert a frame array to uint8 RGBA or RGB.

    Args:
        image: Array of shape (H, W, 3) or (H, W, 4). Integer arrays are
            taken as 0-255 values; float arrays as 0-1 values.
        alpha: Keep (or add, for 3-channel input) an alpha channel.

    Returns:
        Array of shape (H, W, 4) if alpha else (H, W, 3), dtype uint8.

    Raises:
        ValueError: If the array is not an (H, W, 3|4) image.
    """
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) image, got {image.shape}")

    if np.issubdtype(image.dtype, np.floating):
        result = (np.clip(image, 0.0, 1.0) * 255).astype(np.uint8)
    else:
        result = np.clip(image, 0, 255).astype(np.uint8)

    if alpha and result.shape[2] == 3:
        opaque = np.full(result.shape[:2] + (1,), 255, dtype=np.uint8)
        result = np.concatenate([result, opaque], axis=2)
    elif not alpha and result.shape[2] == 4:
        result = result[:, :, :3]

    return np.ascontiguousarray(result)


def save_png_from_array(
    image: npt.NDArray[np.generic],
    filepath: str | Path,
    *,
    alpha: bool = True,
) -> None:
    """Save a frame array as a PNG file.

    Args:
        image: Frame array, see image_to_uint8().
        filepath: Output file path (should end in .png).
        alpha: Write RGBA (True) or RGB (False).
    """
    image_uint8 = image_to_uint8(image, alpha=alpha)
    # (H, W, 4) uint8 maps to RGBA, (H, W, 3) to RGB
    PILImage.fromarray(image_uint8).save(filepath)
    logger.info("Saved {}x{} image to {}", image_uint8.shape[1], image_uint8.shape[0], filepath)


def save_png(
    renderer: FrameRenderer,
    filepath: str | Path,
    *,
    alpha: bool = True,
) -> None:
    """Save the last rendered frame as a PNG file.

    Args:
        renderer: The FrameRenderer holding the frame.
        filepath: Output file path (should end in .png).
        alpha: Write RGBA (True) or RGB (False).
    """
    save_png_from_array(renderer.get_image_numpy(), filepath, alpha=alpha)
