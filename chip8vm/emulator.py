"""Main CHIP-8 emulator execution engine."""

import os
from typing import Optional, Union

import jax.numpy as jnp
from chip8vm.state import EmulatorState, reset
from chip8vm.decode import Opcode, decode, disassemble
from chip8vm.constants import PROGRAM_START, MAX_ROM_SIZE, NUM_KEYS
from chip8vm.errors import RomTooLargeError
from chip8vm.logging import logger, trace_instruction, cycle_progress
from chip8vm.memory import check_address, write_block
from chip8vm.instructions.system import execute_clear_screen, execute_return
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

RomSource = Union[bytes, bytearray, memoryview, str, os.PathLike]

HANDLERS = {
    Opcode.CLS: execute_clear_screen,
    Opcode.RET: execute_return,
    Opcode.JP: execute_jump,
    Opcode.CALL: execute_call,
    Opcode.SE_IMM: execute_skip_if_equal_immediate,
    Opcode.SNE_IMM: execute_skip_if_not_equal_immediate,
    Opcode.SE_REG: execute_skip_if_equal_register,
    Opcode.LD_IMM: execute_set,
    Opcode.ADD_IMM: execute_add,
    Opcode.LD_REG: execute_alu_operation,
    Opcode.OR: execute_alu_operation,
    Opcode.AND: execute_alu_operation,
    Opcode.XOR: execute_alu_operation,
    Opcode.ADD_REG: execute_alu_operation,
    Opcode.SUB: execute_alu_operation,
    Opcode.SHR: execute_alu_operation,
    Opcode.SUBN: execute_alu_operation,
    Opcode.SHL: execute_alu_operation,
    Opcode.SNE_REG: execute_skip_if_not_equal_register,
    Opcode.LD_I: execute_set_index,
    Opcode.JP_V0: execute_jump_with_offset,
    Opcode.RND: execute_random,
    Opcode.DRW: execute_display,
    Opcode.SKP: execute_skip_if_key_pressed,
    Opcode.SKNP: execute_skip_if_key_not_pressed,
    Opcode.LD_VX_DT: execute_get_delay_timer,
    Opcode.LD_VX_K: execute_wait_for_key,
    Opcode.LD_DT_VX: execute_set_delay_timer,
    Opcode.LD_ST_VX: execute_set_sound_timer,
    Opcode.ADD_I_VX: execute_add_to_index,
    Opcode.LD_F_VX: execute_font_character,
    Opcode.LD_B_VX: execute_bcd_conversion,
    Opcode.LD_MEM_VX: execute_store_registers,
    Opcode.LD_VX_MEM: execute_load_registers,
}


def execute(state: EmulatorState, instruction: int, address: Optional[int] = None) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Unrecognized instructions are logged and leave the state untouched.
    ``address`` is where the word was fetched from; ``cycle`` always passes it.
    """
    decoded_instruction = decode(instruction)

    if decoded_instruction.op is None:
        location = f" at 0x{address:03X}" if address is not None else ""
        logger.warning(
            f"Unrecognized instruction 0x{decoded_instruction.raw:04X}{location}, skipped"
        )
        return state

    return HANDLERS[decoded_instruction.op](state, decoded_instruction)


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into uint16."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance pc by 2."""
    pc = check_address(state.pc, 2)
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=jnp.asarray(pc + 2, dtype=jnp.uint16)), instruction


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement each nonzero timer by one."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def cycle(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute step followed by one timer tick.

    Fetching the last word of memory advances pc to 0x1000. Unless the
    instruction there moves pc back into memory, the cycle raises
    :class:`AddressOutOfRangeError`.
    """
    pc = int(state.pc)
    state, instruction = fetch(state)
    if logger.is_enabled_for("DEBUG"):
        trace_instruction(pc, instruction, disassemble(instruction))
    state = execute(state, instruction, pc)
    check_address(state.pc)
    return tick_timers(state)


def run_cycles(state: EmulatorState, num_cycles: int, show_progress: bool = False) -> EmulatorState:
    """Run ``num_cycles`` cycles back to back."""
    for _ in cycle_progress(num_cycles, show_progress):
        state = cycle(state)
    return state


def _read_rom(source: RomSource) -> Optional[bytes]:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    try:
        with open(source, 'rb') as f:
            return f.read()
    except OSError as e:
        logger.warning(f"Could not read ROM '{source}': {e}")
        return None


def load_rom(state: EmulatorState, source: RomSource) -> EmulatorState:
    """Reset the machine and load ROM data into memory starting at 0x200.

    ``source`` is either raw bytes or a file path. An empty or unreadable ROM
    leaves the machine reset but unprogrammed.
    """
    state = reset(state)
    rom_data = _read_rom(source)
    if rom_data is None:
        return state
    if not rom_data:
        logger.warning("Empty ROM, nothing loaded")
        return state
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLargeError(
            f"ROM is {len(rom_data)} bytes, at most {MAX_ROM_SIZE} fit in program memory"
        )
    new_memory = write_block(state.memory, PROGRAM_START, list(rom_data))
    logger.info(f"Loaded {len(rom_data)} byte ROM at 0x{PROGRAM_START:03X}")
    return state.replace(memory=new_memory)


def set_keypad(state: EmulatorState, keys) -> EmulatorState:
    """Replace the 16 key states before the next cycle."""
    keypad = jnp.asarray(keys, dtype=jnp.bool_)
    if keypad.shape != (NUM_KEYS,):
        raise ValueError(f"Expected {NUM_KEYS} key states, got shape {keypad.shape}")
    return state.replace(keypad=keypad)


def _check_key(key: int) -> int:
    key = int(key)
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key must be in 0..{NUM_KEYS - 1}, got {key}")
    return key


def press_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark key ``0x0``..``0xF`` as held."""
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(True))


def release_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark key ``0x0``..``0xF`` as released."""
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(False))


def sound_active(state: EmulatorState) -> bool:
    """Whether the host should be playing the buzzer tone."""
    return bool(state.sound_timer > 0)
