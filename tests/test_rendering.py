"""Tests for display export and rendering."""

import numpy as np
import pytest
from PIL import Image
from chip8vm import execute, framebuffer, display_to_rgb, create_color_scheme, save_frame, PIXEL_ON
from conftest import setup_sprite_in_memory


@pytest.fixture
def drawn_state(fresh_state):
    """A single lit pixel at (3, 2)."""
    state = setup_sprite_in_memory(fresh_state, 0x300, [0x10])
    state = execute(state, 0x6000)
    state = execute(state, 0x6102)
    state = execute(state, 0xA300)
    return execute(state, 0xD011)


def test_framebuffer_row_major(drawn_state):
    words = framebuffer(drawn_state)

    assert words.dtype == np.uint32
    assert words.shape == (64 * 32,)
    assert words[2 * 64 + 3] == PIXEL_ON
    assert int(words.sum(dtype=np.uint64)) == PIXEL_ON


def test_framebuffer_is_read_only(drawn_state):
    words = framebuffer(drawn_state)
    with pytest.raises(ValueError):
        words[0] = PIXEL_ON


def test_display_to_rgb(drawn_state):
    rgb = display_to_rgb(drawn_state.display, scale=2, on_color=(1, 2, 3), off_color=(9, 9, 9))

    assert rgb.shape == (64, 128, 3)
    assert rgb.dtype == np.uint8
    assert rgb[4, 6].tolist() == [1, 2, 3]
    assert rgb[5, 7].tolist() == [1, 2, 3]
    assert rgb[0, 0].tolist() == [9, 9, 9]


def test_display_to_rgb_invalid_scale(drawn_state):
    with pytest.raises(ValueError):
        display_to_rgb(drawn_state.display, scale=0)


def test_color_schemes():
    assert create_color_scheme("classic") == ((0, 255, 0), (0, 0, 0))
    with pytest.raises(ValueError, match="Unknown color scheme"):
        create_color_scheme("plaid")


def test_save_frame(drawn_state, tmp_path):
    path = tmp_path / "frame.png"

    save_frame(drawn_state, str(path), scale=1, color_scheme="white")

    with Image.open(path) as image:
        assert image.size == (64, 32)
        assert image.getpixel((3, 2)) == (255, 255, 255)
        assert image.getpixel((0, 0)) == (0, 0, 0)
