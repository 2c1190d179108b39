"""CHIP-8 rendering utilities for visualization."""

import jax.numpy as jnp
import numpy as np
from typing import Tuple

from PIL import Image

from chip8vm.state import EmulatorState
from chip8vm.constants import PIXEL_ON


def framebuffer(state: EmulatorState) -> np.ndarray:
    """Export the display as 2048 read-only 32-bit words in row-major order.

    Word ``y * 64 + x`` holds pixel ``(x, y)``, ``0xFFFFFFFF`` when lit and
    ``0x00000000`` when unlit, so a presenter can upload it unchanged.
    """
    words = np.ascontiguousarray(np.asarray(state.display, dtype=np.uint32).T).reshape(-1)
    words.flags.writeable = False
    return words


def display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert the CHIP-8 display to an RGB array with optional upscaling.

    Args:
        display: Array of shape (64, 32) of display words
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for lit pixels (default: green)
        off_color: RGB color for unlit pixels (default: black)

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")

    pixels = np.asarray(display) == PIXEL_ON

    # State: (64 width, 32 height) -> Image: (32 height, 64 width)
    pixels = pixels.T
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbor upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "classic",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def save_frame(
    state: EmulatorState,
    filename: str,
    scale: int = 8,
    color_scheme: str = "classic",
) -> None:
    """Write the current display to an image file (format from the extension)."""
    on_color, off_color = create_color_scheme(color_scheme)
    rgb = display_to_rgb(state.display, scale, on_color, off_color)
    Image.fromarray(rgb).save(filename)
