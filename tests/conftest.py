"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state
from chip8vm.logging import logger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture(autouse=True)
def plain_logger():
    """Uncolored, untimestamped INFO logging, restored after each test."""
    saved = (logger.log_level, logger.use_colors, logger.show_timestamps, dict(logger.colors))
    logger.log_level = "INFO"
    logger.use_colors = False
    logger.show_timestamps = False
    logger.colors = {k: "" for k in logger.colors}
    yield logger
    logger.log_level, logger.use_colors, logger.show_timestamps, logger.colors = saved


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def setup_program(state, address, instructions):
    """Helper to write 16-bit instruction words into memory, big-endian."""
    program = []
    for word in instructions:
        program.extend([(word >> 8) & 0xFF, word & 0xFF])
    return setup_sprite_in_memory(state, address, program)
