"""Checked access to the 4K address space."""

import jax.numpy as jnp
from chip8vm.constants import MEMORY_SIZE
from chip8vm.errors import AddressOutOfRangeError


def check_address(address: int, length: int = 1) -> int:
    """Validate that ``address .. address + length - 1`` lies in memory."""
    address = int(address)
    if address < 0 or length < 0 or address + max(length, 1) > MEMORY_SIZE:
        raise AddressOutOfRangeError(address, length)
    return address


def read_block(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    start = check_address(address, length)
    return memory[start:start + length]


def write_block(memory: jnp.ndarray, address: int, values) -> jnp.ndarray:
    """Return a copy of ``memory`` with ``values`` stored from ``address``."""
    values = jnp.asarray(values, dtype=jnp.uint8)
    start = check_address(address, len(values))
    return memory.at[start:start + len(values)].set(values)
