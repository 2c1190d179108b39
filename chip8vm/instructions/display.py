"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER, PIXEL_ON, PIXEL_OFF
from chip8vm.memory import read_block

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Only the origin wraps; sprite pixels past the right or bottom edge are clipped.
    VF is set when a lit pixel gets turned off.
    """
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT
    height = instruction.n

    if height == 0:
        return state.replace(V=state.V.at[FLAG_REGISTER].set(0))

    rows = read_block(state.memory, state.I, height).astype(jnp.int32)

    in_sprite = (xx >= sprite_x) & (xx < sprite_x + 8) & (yy >= sprite_y) & (yy < sprite_y + height)

    row_offset = jnp.clip(yy - sprite_y, 0, height - 1)
    col_offset = jnp.clip(xx - sprite_x, 0, 7)
    sprite = (((rows[row_offset] >> (7 - col_offset)) & 1) == 1) & in_sprite

    lit = state.display == jnp.uint32(PIXEL_ON)
    collision = jnp.any(lit & sprite)

    return state.replace(
        display=jnp.where(sprite ^ lit, jnp.uint32(PIXEL_ON), jnp.uint32(PIXEL_OFF)),
        V=state.V.at[FLAG_REGISTER].set(collision.astype(jnp.uint8))
    )
